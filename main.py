import shutil

from rich.pretty import pprint

from commandbridge import *

registry = Registry()


@registry.command(
    "copy",
    "Copies a file",
    value("s", "Source", "File to read", mandatory=True),
    value("t", "Target", "File to write", mandatory=True),
    switch("v", "verbose", "Print the parsed arguments"),
)
class Copy:
    def __invoke__(self, arguments):
        if "verbose" in arguments:
            pprint(arguments)
        shutil.copy(arguments["Source"], arguments["Target"])


@registry.command("ping", "Answers pong")
def ping(arguments):
    print("pong")


if __name__ == '__main__':
    invoke(Dispatcher(registry, colorful=True, fancy=True))
