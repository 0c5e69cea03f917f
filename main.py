import sys

from rich.pretty import pprint

from argfold import *
from argfold.utils import Unset, coalesce


class Copy:
    """
    options of a toy 'cp'.
    """
    __help__ = Description(
        "Copy files from one place to another place.",
        "main.py [OPTIONS] SRC... DST",
        [PositionalHelp("SRC", "files to copy"), PositionalHelp("DST", "destination")],
        [
            OptionHelp("f", "force", "overwrite existing files"),
            OptionHelp("j", "jobs", "number of workers", default=1),
            OptionHelp("v", None, "more output, repeat for even more"),
            OptionHelp("h", "help", "print this help and exit"),
        ],
        colorful=True
    )

    def __init__(self, force, jobs, verbose, paths):
        self.force = force
        self.jobs = jobs
        self.verbose = verbose
        self.paths = paths

    def __repr__(self):
        return "Copy(force=%r, jobs=%r, verbose=%r, paths=%r)" % (self.force, self.jobs, self.verbose, self.paths)

    @classmethod
    def __initializer__(cls):
        return CopyInitializer()


class CopyInitializer(Initializer):

    def __init__(self):
        self.force = Flag()
        self.jobs = Unset
        self.verbose = Count(maximum=3)
        self.paths = []

    def accept(self, token, /):
        match token:
            case BaseToken(TokenKind.SHORT, "h") | BaseToken(TokenKind.LONG, "help"):
                Copy.__help__.print()
                sys.exit(0)
            case BaseToken(TokenKind.SHORT, "f") | BaseToken(TokenKind.LONG, "force"):
                try_set(self.force, token)
            case BaseToken(TokenKind.SHORT, "j") | BaseToken(TokenKind.LONG, "jobs"):
                try_insert(self, "jobs", token, int)
            case BaseToken(TokenKind.SHORT, "v"):
                try_increment(self.verbose, token)
            case BaseToken(TokenKind.POSITIONAL, None, path):
                self.paths.append(path)
            case BaseToken(TokenKind.DASHDASH):
                pass
            case _:
                raise UnknownOptionError(token=token)

    def finish(self):
        if len(self.paths) < 2:
            raise ExpectedPositionalError("expected at least one source and a destination")
        return Copy(bool(self.force), coalesce(self.jobs, 1), int(self.verbose), self.paths)


if __name__ == '__main__':
    pprint(run(Copy, fancy=True))
