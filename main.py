import sys

from rich.pretty import pprint

from pennant import *

__prog__ = "pennant-demo"

catalog = OptionCatalog(
    Option("-o", "--output", descr="write the report here", nargs=1, metavar="FILE", required=True),
    Option("-v", "--verbose", descr="print progress"),
    Option("-D", descr="define a property", nargs=2, separator="="),
    Option("--legacy", deprecated=Deprecation("2.0", True, "Use --output.")),
    OptionGroup(Option("--fast"), Option("--safe"), name="mode"),
)


if __name__ == '__main__':
    pprint(Parser(catalog, shell=True).parse(sys.argv[1:]))
