import sys
from pathlib import Path

from pytest import Item, fixture

from infix import cli
from infix.cli import CLI


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every passing assertion, so a run can be audited expression by
    expression.

    Only called with enable_assertion_pass_hook set; use with pytest -rP.
    '''
    where = item.name + ':' + str(lineno)
    print('given', where, orig)
    # Drop the trailing full-diff hint lines
    print('actual', where, '\n'.join(str(expl).splitlines()[:-2]))


@fixture(autouse=True)
def workdir(tmp_path: Path, monkeypatch) -> Path:
    '''
    Run every test in its own directory, so the default history file never
    lands in the source tree.
    '''
    monkeypatch.chdir(tmp_path)
    return tmp_path


@fixture
def history_file(workdir: Path) -> Path:
    return workdir / CLI.HISTORY_FILE


class _LiveStderr:
    '''Forward to whatever sys.stderr is at the time of the write.'''

    def __getattr__(self, name):
        return getattr(sys.stderr, name)


@fixture(autouse=True)
def cli_streams(monkeypatch) -> None:
    '''
    infix.cli binds sys.stderr at import time, before capsys swaps it in;
    route it through the live sys.stderr so capsys sees it.
    '''
    monkeypatch.setattr(cli, 'stderr', _LiveStderr())
