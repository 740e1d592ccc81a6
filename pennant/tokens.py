r"""
Pennant tokenizer.

Splits a raw argument vector into a normalized token stream the parser can
walk without re-reading raw strings.

Token kinds
- SWITCH:     something spelled like an option ("-v", "--verbose", "-verb").
- INLINE:     a value glued to the preceding switch ("--out=x", "-ox").
- OPERAND:    a free-standing value (positional or option value).
- TERMINATOR: the first "--"; every later argument is an OPERAND.

Rules, in order, for an argument starting with "-"
1. "--name=value"      → SWITCH "--name" + INLINE "value"
2. "-x" / "-x=value"   → SWITCH "-x" (+ INLINE) when "x" is a registered short name
3. "-1", "-2.5", "-.5" → OPERAND (negative numbers), unless rule 2 applied
4. "-name[=value]"     → SWITCH (+ INLINE) when "name" is a registered long name
5. "-abc"              → bundled short switches; the first one taking values
                         stops the bundle and keeps the rest as its INLINE value
                         ("-Dkey=value" → "-D" + "key=value")
6. "-n=value"          → SWITCH "-n" + INLINE "value"
7. anything else       → a single SWITCH for the parser to resolve (abbreviation
                         or unrecognized)

Each token remembers the index and raw spelling of the argument it came from,
so the parser can recover the original text ("pass through" modes).

Example
    >>> catalog = OptionCatalog(Option("-a"), Option("-b"), Option("-o", nargs=1))
    >>> [token.text for token in Tokenizer(catalog).tokenize(["-ab", "-ofile", "--", "-a"])]
    ['-a', '-b', '-o', 'file', '--', '-a']
"""
import re
from collections import namedtuple
from enum import Enum

NUMBER = re.compile(r"-(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?")


class TokenKind(Enum):
    SWITCH = "switch"
    INLINE = "inline"
    OPERAND = "operand"
    TERMINATOR = "terminator"


Token = namedtuple("Token", ("kind", "text", "index", "source"))


class Tokenizer:
    """
    Stateless splitter bound to a catalog (only short/long name lookups are used).
    """

    def __init__(self, catalog, /):
        self.catalog = catalog

    def tokenize(self, args, /):
        """
        Return the list of tokens for an argument vector.

        Raises
        - TypeError: when an argument is not a string.
        """
        tokens = []
        terminated = False
        for index, argument in enumerate(args):
            if not isinstance(argument, str):
                raise TypeError("arguments must be strings, got %r" % type(argument).__name__)
            if terminated:
                tokens.append(Token(TokenKind.OPERAND, argument, index, argument))
                continue
            if argument == "--":
                terminated = True
            tokens.extend(self._split(argument, index))
        return tokens

    def _split(self, argument, index):
        def token(kind, text):
            return Token(kind, text, index, argument)

        if argument == "--":
            return [token(TokenKind.TERMINATOR, argument)]
        if argument == "-" or not argument.startswith("-"):
            return [token(TokenKind.OPERAND, argument)]

        if argument.startswith("--"):
            switch, equals, value = argument.partition("=")
            if equals:
                return [token(TokenKind.SWITCH, switch), token(TokenKind.INLINE, value)]
            return [token(TokenKind.SWITCH, switch)]

        name, equals, value = argument[1:].partition("=")
        glued = [token(TokenKind.INLINE, value)] if equals else []

        if self.catalog.has_short_option(name):
            return [token(TokenKind.SWITCH, "-" + name)] + glued
        if NUMBER.fullmatch(argument):
            return [token(TokenKind.OPERAND, argument)]
        if self.catalog.has_long_option(name):
            return [token(TokenKind.SWITCH, "-" + name)] + glued
        if len(name) > 1 and (bundle := self._burst(argument[1:], token)):
            return bundle
        if equals:
            return [token(TokenKind.SWITCH, "-" + name)] + glued
        return [token(TokenKind.SWITCH, argument)]

    def _burst(self, letters, token):
        """
        Expand "-abc" into "-a -b -c" when every letter is a short option.

        Returns an empty list when the bundle cannot be expanded.
        """
        bundle = []
        for position, letter in enumerate(letters):
            if letter == "-" or (option := self.catalog.get_option(letter)) is None or option.short != letter:
                return []
            bundle.append(token(TokenKind.SWITCH, "-" + letter))
            if option.takes_values:
                if rest := letters[position + 1:]:
                    bundle.append(token(TokenKind.INLINE, rest))
                break
        return bundle


__all__ = (
    "TokenKind",
    "Token",
    "Tokenizer",
)
