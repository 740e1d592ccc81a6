"""
Pennant parser.

The parser walks the token stream produced by the Tokenizer against an
OptionCatalog and returns an immutable ParseResult, or surfaces a fault.

state machine
- SCANNING:       decide whether the next token is an option or a positional.
- CONSUMING_ARGS: an option still expects values; take them from the stream.
- DONE:           stream exhausted; check required options and groups.

settings (keyword-only, explicit)
- unrecognized: Unrecognized.FAIL (raise), PASS (keep the raw token as a
  positional) or STOP (the raw token and everything after it are positionals).
- abbreviations: resolve unambiguous prefixes of long names ("--verb").
- stop_at_non_option: the first positional ends option parsing.
- shell: print faults through rich and exit instead of raising.

per-parse state
- group selections, matched entries and positionals live in locals of parse(),
  never on the catalog or its groups, so one catalog can back many parses.
- deprecation warnings are queued and emitted after the final checks, so a
  failed parse reports its fault only.
"""
import difflib
from collections import deque
from collections.abc import Iterable
from enum import Enum

from .catalog import OptionCatalog
from .faults import *
from .options import OptionGroup
from .results import ParseResult
from .tokens import Tokenizer, TokenKind
from .utils import strip_hyphens


class Unrecognized(Enum):
    """how the parser treats a switch that names no registered option."""
    FAIL = "fail"
    PASS = "pass"
    STOP = "stop"


class State(Enum):
    SCANNING = "scanning"
    CONSUMING_ARGS = "consuming-args"
    DONE = "done"


class Parser:
    def __init__(
            self,
            catalog,
            /,
            *,
            unrecognized=Unrecognized.FAIL,
            abbreviations=True,
            stop_at_non_option=False,
            shell=False,
    ):
        if not isinstance(catalog, OptionCatalog):
            raise TypeError("parser catalog must be an option catalog")
        if not isinstance(unrecognized, Unrecognized):
            raise TypeError("parser 'unrecognized' must be an Unrecognized member")
        for name, value in (
                ("abbreviations", abbreviations),
                ("stop_at_non_option", stop_at_non_option),
                ("shell", shell),
        ):
            if not isinstance(value, bool):
                raise TypeError(f"parser {name!r} must be a boolean")

        self.catalog = catalog
        self.unrecognized = unrecognized
        self.abbreviations = abbreviations
        self.stop_at_non_option = stop_at_non_option
        self.shell = shell

    def trigger(self, fault, /, **options):
        trigger(fault, shell=self.shell, **options)

    def parse(self, args, /):
        """
        Parse an argument vector (without the program name).

        Returns
        - ParseResult with the matched options and leftover positionals.

        Faults
        - UnrecognizedOptionError / AmbiguousOptionError: unresolvable switch.
        - FlagAssignmentError: inline value given to a flag ("--verbose=yes").
        - GroupConflictError: two members of one group on the same command line.
        - InsufficientValuesError: an option ran out of values.
        - MissingOptionError: required options or groups absent at the end.
        """
        if isinstance(args, str) or not isinstance(args, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")

        tokens = deque(Tokenizer(self.catalog).tokenize(list(args)))
        entries = []
        positionals = []
        selections = {}
        notices = []

        state = State.SCANNING
        current = None
        while state is not State.DONE:
            match state:
                case State.SCANNING:
                    if not tokens:
                        state = State.DONE
                        continue
                    token = tokens.popleft()

                    match token.kind:
                        case TokenKind.TERMINATOR:
                            # everything after it was tokenized as operands
                            pass
                        case TokenKind.OPERAND | TokenKind.INLINE:
                            positionals.append(token.text)
                            if self.stop_at_non_option:
                                positionals.extend(self._drain(tokens))
                        case TokenKind.SWITCH:
                            if (option := self._resolve(token)) is None:
                                self._unrecognized(token, tokens, positionals)
                                continue

                            self._select(option, selections)
                            if option.deprecated is not None and option not in notices:
                                notices.append(option)

                            entries.append(current := (option, []))
                            inline = tokens.popleft() if tokens and tokens[0].kind is TokenKind.INLINE else None
                            if not option.takes_values:
                                if inline is not None:
                                    self.trigger(FlagAssignmentError(
                                        option,
                                        inline.text,
                                        hint="remove everything from '=' (for example: %s)" % token.text
                                    ))
                                continue
                            if inline is not None:
                                self._feed(option, current[1], inline.text)
                            state = State.CONSUMING_ARGS

                case State.CONSUMING_ARGS:
                    option, values = current
                    if not option.unbounded and len(values) >= option.nargs:
                        state = State.SCANNING
                        continue
                    if tokens and self._accepts(tokens[0]):
                        token = tokens.popleft()
                        if token.kind is TokenKind.SWITCH:
                            text = self._whole(token, tokens)
                        else:
                            text = token.text
                        self._feed(option, values, text)
                        continue

                    if not values or not option.unbounded and len(values) < option.nargs:
                        if not option.optional:
                            self.trigger(InsufficientValuesError(
                                option,
                                len(values),
                                hint="provide the value%s right after %r" % (
                                    "s" * (option.unbounded or option.nargs > 1),
                                    option.key
                                )
                            ))
                    state = State.SCANNING

        matched = {option.key for option, _ in entries}
        missing = []
        for required in self.catalog.required:
            if isinstance(required, OptionGroup):
                if required not in selections:
                    missing.append(required)
            elif required not in matched:
                missing.append(required)
        if missing:
            self.trigger(MissingOptionError(
                missing,
                hint="add the missing option%s to the command line" % ("s" * (len(missing) != 1))
            ))

        # deprecations are reported only once the parse is known to succeed
        for option in notices:
            self.trigger(DeprecatedOptionWarning(
                option,
                hint="check the documentation of %r for its replacement" % option.key
            ))
        return ParseResult(entries, positionals)

    def _lookup(self, text):
        """
        Return every option a switch spelling may stand for.

        Order: exact short name, exact long name, then (when enabled) long
        names abbreviated by the spelling. Single-dash spellings only
        abbreviate when longer than one character.
        """
        name = strip_hyphens(text)
        if not name:
            return []
        if not text.startswith("--") and self.catalog.has_short_option(name):
            return [self.catalog.get_option(name)]
        if self.catalog.has_long_option(name):
            return self.catalog.get_matching_options(name)
        if self.abbreviations and (text.startswith("--") or len(name) > 1):
            return self.catalog.get_matching_options(name)
        return []

    def _resolve(self, token):
        match self._lookup(token.text):
            case []:
                return None
            case [option]:
                return option
            case candidates:
                self.trigger(AmbiguousOptionError(
                    token.text,
                    [option.long for option in candidates],
                    hint="spell out one of: %s" % ", ".join("--" + option.long for option in candidates)
                ))

    def _accepts(self, token):
        """whether a token can be taken as an option value."""
        match token.kind:
            case TokenKind.TERMINATOR:
                return False
            case TokenKind.SWITCH:
                return not self._lookup(token.text)
            case _:
                return True

    def _select(self, option, selections):
        if (group := self.catalog.get_group(option)) is None:
            return
        if (selected := selections.setdefault(group, option)) != option:
            self.trigger(GroupConflictError(
                group,
                selected,
                option,
                hint="use only one of %s" % group
            ))

    def _unrecognized(self, token, tokens, positionals):
        match self.unrecognized:
            case Unrecognized.FAIL:
                known = [name for option in self.catalog.options for name in option.names]
                suggestions = difflib.get_close_matches(token.text, known, 5)
                try:
                    hint = "did you mean %r?" % suggestions[0]
                except IndexError:
                    hint = "check the spelling of %r" % token.text
                self.trigger(UnrecognizedOptionError(token.text, suggestions=suggestions, hint=hint))
            case Unrecognized.PASS:
                positionals.append(self._whole(token, tokens))
            case Unrecognized.STOP:
                positionals.append(self._whole(token, tokens))
                positionals.extend(self._drain(tokens))

    @staticmethod
    def _feed(option, values, text):
        """append one raw token, split by the option separator within the remaining arity."""
        if option.separator is None:
            values.append(text)
        elif option.unbounded:
            values.extend(text.split(option.separator))
        else:
            values.extend(text.split(option.separator, max(option.nargs - len(values) - 1, 0)))

    @staticmethod
    def _whole(token, tokens):
        """consume the siblings of a token and return the raw argument it came from."""
        while tokens and tokens[0].index == token.index:
            tokens.popleft()
        return token.source

    @staticmethod
    def _drain(tokens):
        """consume every remaining token and return the raw arguments."""
        rest = []
        last = None
        while tokens:
            token = tokens.popleft()
            if token.index != last:
                rest.append(token.source)
                last = token.index
        return rest


def parse(catalog, args, /, **settings):
    """
    Parse `args` against `catalog` in one call.

    settings are forwarded to Parser (unrecognized, abbreviations,
    stop_at_non_option, shell).
    """
    return Parser(catalog, **settings).parse(args)


__all__ = (
    "Unrecognized",
    "State",
    "Parser",
    "parse",
)
