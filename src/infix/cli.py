from os import isatty, path as ospath
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

import regex
from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from .converter import to_postfix
from .engine import evaluate
from .history import History, HistoryError, parse_indexes
from .lexer import Lexer
from .util import EvalError


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    # Line recall only; results are logged
                                    # by History.
                                    history=InMemoryHistory(),
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.

    Every input line is an expression to evaluate, or a :command.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = 'calc_history.txt'
    COMMAND_PREFIX = ':'
    # Comma separated indexes, spaces allowed, then an optional path.
    SELECTION = r'(?P<indexes>(?:[^,\s]*\s*,\s*)*[^,\s]*)\s*(?P<path>.*)'

    def dumper(self):
        '''
        Dump tokens and postfix program of every expression.
        '''
        lexer = Lexer()
        for line in self.args.expressions:
            line = line.strip()
            if not line:
                continue
            print('[kind]\t<repr(text)>')
            tokens = lexer.tokenize(line)
            for token in tokens:
                print(token.kind, repr(token.text), sep='\t')
            try:
                postfix = to_postfix(tokens)
            except EvalError as e:
                print(e, file=stderr)
            else:
                print('postfix', ' '.join(map(str, postfix)), sep='\t')

    def executor(self):
        '''
        Evaluate expressions and run commands until input or :quit runs out.
        '''
        self.history.load()
        for line in self.args.expressions:
            if not self.handle(line):
                break

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print('split:', Lexer.SPLIT)
        print('number:', Lexer.NUMBER)

    def handle(self, line):
        '''
        Evaluate or run one input line. Return False to stop.
        '''
        line = line.strip()
        if line.startswith(self.COMMAND_PREFIX):
            return self.command(line[len(self.COMMAND_PREFIX):])
        if not line:
            if self._interactive():
                print('Expression cannot be empty.', file=stderr)
            return True
        result = evaluate(line)
        if result.ok:
            print(result.value)
            self.history.record(line, result.value)
        else:
            print(result.error, file=stderr)
        return True

    def command(self, line):
        '''
        Run a command line (without its prefix). Return False to stop.
        '''
        name, _, rest = line.strip().partition(' ')
        for names, action in [({'q', 'quit'}, None),
                              ({'h', 'history'}, self.show_history),
                              ({'e', 'export'}, self.export_all),
                              ({'s', 'select'}, self.export_selected),
                              ({'?', 'help'}, self.show_help)]:
            if name in names:
                break
        else:
            print('Unknown command {!r}, try :help'.format(name),
                  file=stderr)
            return True
        if action is None:
            return False
        try:
            action(rest.strip())
        except (HistoryError, OSError) as e:
            print('Could not export: {}'.format(e), file=stderr)
        return True

    def show_history(self, _):
        if not len(self.history):
            print('History is empty.')
            return
        for i, entry in enumerate(self.history):
            print('{}) {}'.format(i, entry))

    def export_all(self, path):
        '''
        :export [PATH] -- write the whole history to PATH.
        '''
        if not path:
            print('Default history file:',
                  ospath.abspath(self.history.target_path()))
            return
        print('Saved to', self.history.export(path))

    def export_selected(self, rest):
        '''
        :select 0,2,5 [PATH] -- write the numbered entries to PATH.
        '''
        if not len(self.history):
            print('History is empty.')
            return
        match = regex.fullmatch(self.SELECTION, rest)
        text, path = match.group('indexes', 'path')
        indexes, complaints = parse_indexes(text, len(self.history))
        for complaint in complaints:
            print(complaint, file=stderr)
        if not indexes:
            print('Nothing selected, export cancelled.', file=stderr)
            return
        print('Saved to', self.history.export_selected(indexes, path))

    def show_help(self, _):
        print('expressions: numbers, + - * / // % ^ (or **), brackets')
        print('commands:',
              *['{}{}'.format(self.COMMAND_PREFIX, name)
                for name
                in ['history', 'export [PATH]', 'select 0,2,5 [PATH]',
                    'help', 'quit']],
              sep='\n  ')

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='Infix calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        history_group = self.argument_parser.add_mutually_exclusive_group()
        history_group.add_argument('-f', '--history-file',
                                   default=self.HISTORY_FILE)
        history_group.add_argument('-n', '--no-history',
                                   action='store_const',
                                   const=None,
                                   dest='history_file')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def _interactive(self):
        return isinstance(self.args.expressions, InteractiveInput)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                            else logging.WARNING,
                            format='%(levelname)s:%(name)s: %(message)s')
        self.history = History(self.args.history_file)
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
