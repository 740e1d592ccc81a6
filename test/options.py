"""
Options module behavioral tests.

Scope
- Validate Option construction: names, arity, converter, separator, deprecation.
- Validate display contracts: str(option) and deprecation_notice() never raise.
- Validate OptionGroup ordering, replacement and rendering.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from pennant import Option, OptionGroup, Deprecation, OptionCatalog


class TestOption(TestCase):
    """Behavioral tests for Option specifications."""

    def testOptionRequiresAtLeastOneName(self):
        with self.assertRaises(TypeError):
            Option()

    def testShortAndLongNamesAreSplit(self):
        o = Option("-o", "--output")
        self.assertEqual(o.short, "o")
        self.assertEqual(o.long, "output")
        self.assertEqual(o.key, "o")
        self.assertEqual(o.names, ("-o", "--output"))

    def testLongOnlyKeyIsLongName(self):
        o = Option("--version")
        self.assertIsNone(o.short)
        self.assertEqual(o.key, "version")

    def testDigitShortNameAllowed(self):
        self.assertEqual(Option("-1").short, "1")

    def testShortNameMustBeOneCharacter(self):
        with self.assertRaises(ValueError):
            Option("-ab")

    def testTwoShortNamesRejected(self):
        with self.assertRaises(ValueError):
            Option("-a", "-b")

    def testTwoLongNamesRejected(self):
        with self.assertRaises(ValueError):
            Option("--alpha", "--beta")

    def testMalformedNamesRejected(self):
        for name in ("verbose", "--bad_name", "---x", "--", "-"):
            with self.subTest(name=name), self.assertRaises(ValueError):
                Option(name)

    def testNonStringNameRejected(self):
        with self.assertRaises(TypeError):
            Option(1)

    def testDescrDefaultsToNone(self):
        self.assertIsNone(Option("-a").descr)

    def testDescrIsTrimmed(self):
        self.assertEqual(Option("-a", descr="  all files ").descr, "all files")

    def testDescrEmptyRejected(self):
        with self.assertRaises(ValueError):
            Option("-a", descr="   ")

    def testFlagByDefault(self):
        o = Option("-a")
        self.assertEqual(o.nargs, 0)
        self.assertFalse(o.takes_values)
        self.assertFalse(o.unbounded)
        self.assertIs(o.type, str)

    def testNargsEllipsisLiteral(self):
        o = Option("-f", nargs="...")
        self.assertIs(o.nargs, Ellipsis)
        self.assertTrue(o.unbounded)
        self.assertTrue(o.takes_values)

    def testNegativeNargsRejected(self):
        with self.assertRaises(ValueError):
            Option("-a", nargs=-1)

    def testBooleanNargsRejected(self):
        with self.assertRaises(TypeError):
            Option("-a", nargs=True)

    def testTypeMustBeCallable(self):
        with self.assertRaises(TypeError):
            Option("-n", nargs=1, type="int")

    def testSeparatorOnFlagRejected(self):
        with self.assertRaises(ValueError):
            Option("-D", separator="=")

    def testSeparatorMustBeSingleCharacter(self):
        with self.assertRaises(ValueError):
            Option("-D", nargs=2, separator="==")

    def testOptionalOnFlagRejected(self):
        with self.assertRaises(ValueError):
            Option("-a", optional=True)

    def testRequiredMustBeBoolean(self):
        with self.assertRaises(TypeError):
            Option("-a", required="yes")

    def testDeprecatedMustBeBooleanOrDeprecation(self):
        with self.assertRaises(TypeError):
            Option("-a", deprecated="since 2.0")

    def testDeprecatedTrueMaterialized(self):
        self.assertEqual(Option("-a", deprecated=True).deprecated, Deprecation())
        self.assertIsNone(Option("-a").deprecated)

    def testOptionIsReadOnly(self):
        o = Option("-a", descr="all")
        with self.assertRaises(AttributeError):
            o.descr = "none"
        with self.assertRaises(AttributeError):
            o.required = True

    def testEqualityUsesNames(self):
        self.assertEqual(Option("-a", descr="x"), Option("-a", nargs=1, descr="y"))
        self.assertEqual(hash(Option("-a")), hash(Option("-a", required=True)))
        self.assertNotEqual(Option("-a"), Option("-a", "--all"))

    def testReplaceRebuildsWithOverrides(self):
        o = Option(
            "-D", "--define",
            descr="define",
            type=int,
            nargs=2,
            separator="=",
            metavar="PAIR",
            required=True,
            deprecated=Deprecation(since="2.0"),
        )
        clone = o.__replace__(required=False)
        self.assertIsNot(clone, o)
        self.assertEqual(clone, o)
        self.assertFalse(clone.required)
        self.assertTrue(o.required)
        for field in ("short", "long", "descr", "type", "nargs", "separator", "metavar", "deprecated"):
            with self.subTest(field=field):
                self.assertEqual(getattr(clone, field), getattr(o, field))

    def testReplaceSparseOption(self):
        clone = Option("--version").__replace__(descr="show the version")
        self.assertEqual(clone.descr, "show the version")
        self.assertIsNone(clone.deprecated)
        self.assertIsNone(clone.separator)

    def testRichRepr(self):
        o = Option("-o", "--output", nargs=1, metavar="FILE")
        fields = dict(o.__rich_repr__())
        self.assertEqual(fields["short"], "o")
        self.assertEqual(fields["metavar"], "FILE")
        self.assertTrue(repr(o).startswith("option(short='o', long='output'"))


class TestOptionDisplay(TestCase):
    """Display contracts consumed by help collaborators."""

    def assertToStrings(self, option):
        # Should never throw and always return text.
        self.assertIsInstance(str(option), str)
        self.assertIsInstance(option.deprecation_notice(), str)

    def testDeprecated(self):
        catalog = OptionCatalog()
        catalog.add_option(Option("-a"))
        catalog.add_option(Option("-b", deprecated=True))
        catalog.add_option(Option("-c", deprecated=Deprecation(since="2.0", for_removal=True, descr="Use X.")))
        catalog.add_option(Option("-d", "--longD", deprecated=True, nargs=...))

        self.assertTrue(str(catalog.get_option("a")).startswith("[ Option a"))
        self.assertTrue(str(catalog.get_option("b")).startswith("[ Option b"))
        self.assertTrue(str(catalog.get_option("c")).startswith("[ Option c"))

        self.assertFalse(catalog.get_option("a").deprecation_notice().startswith("Option "))
        self.assertEqual("Option 'b': Deprecated", catalog.get_option("b").deprecation_notice())
        self.assertEqual(
            "Option 'c': Deprecated for removal since 2.0: Use X.",
            catalog.get_option("c").deprecation_notice()
        )
        for key in "abcd":
            self.assertToStrings(catalog.get_option(key))

    def testDeprecationFragmentsAreOptional(self):
        self.assertEqual(str(Deprecation()), "Deprecated")
        self.assertEqual(str(Deprecation(for_removal=True)), "Deprecated for removal")
        self.assertEqual(str(Deprecation(since="1.5")), "Deprecated since 1.5")
        self.assertEqual(str(Deprecation(descr="Use Y.")), "Deprecated: Use Y.")
        self.assertEqual(str(Deprecation(since="", descr="")), "Deprecated")

    def testStringFull(self):
        o = Option("-f", "--foo", nargs=1, descr="Foo", required=True)
        self.assertEqual(str(o), "[ Option f foo (required) [ARG] :: Foo :: str ]")

    def testStringSparse(self):
        self.assertEqual(str(Option("--version")), "[ Option version :: str ]")

    def testStringDeprecatedUnbounded(self):
        o = Option("-d", "--longD", deprecated=True, nargs=..., type=int)
        self.assertEqual(str(o), "[ Option d longD (deprecated) [ARG...] :: int ]")

    def testStringWithCallableWithoutName(self):
        class Converter:
            def __call__(self, text):
                return text

        self.assertToStrings(Option("-x", nargs=1, type=Converter()))


class TestOptionGroup(TestCase):
    """Behavioral tests for OptionGroup."""

    def testGroupPreservesInsertionOrder(self):
        g = OptionGroup(Option("-b"), Option("-a"))
        self.assertEqual(g.keys, ["b", "a"])

    def testGroupReplacesEqualOption(self):
        g = OptionGroup(Option("-a", descr="first"))
        g.add(Option("-a", descr="second"))
        self.assertEqual(len(g), 1)
        self.assertEqual(g.options[0].descr, "second")

    def testGroupDiscard(self):
        a = Option("-a")
        g = OptionGroup(a, Option("-b"))
        g.discard(a)
        self.assertNotIn(a, g)
        g.discard(a)
        self.assertEqual(g.keys, ["b"])

    def testGroupMembersMustBeOptions(self):
        with self.assertRaises(TypeError):
            OptionGroup("-a")

    def testGroupRequiredMustBeBoolean(self):
        with self.assertRaises(TypeError):
            OptionGroup(Option("-a"), required=1)

    def testGroupNameEmptyRejected(self):
        with self.assertRaises(ValueError):
            OptionGroup(Option("-a"), name=" ")

    def testGroupOptionsAreCopies(self):
        g = OptionGroup(Option("-a"))
        g.options.append(Option("-b"))
        self.assertEqual(len(g), 1)

    def testGroupString(self):
        g = OptionGroup(Option("-a", descr="alpha"), Option("--beta"))
        self.assertEqual(str(g), "[-a alpha, --beta]")

    def testGroupCopy(self):
        g = OptionGroup(Option("-a"), Option("-b"), required=True, name="mode")
        clone = copy.copy(g)
        clone.discard(Option("-a"))
        self.assertEqual(g.keys, ["a", "b"])
        self.assertEqual(clone.keys, ["b"])
        self.assertTrue(clone.required)
        self.assertEqual(clone.name, "mode")
        self.assertIsNone(copy.copy(OptionGroup(Option("-a"))).name)

    def testGroupsCompareByIdentity(self):
        self.assertNotEqual(OptionGroup(Option("-a")), OptionGroup(Option("-a")))


if __name__ == "__main__":
    unittest.main()
