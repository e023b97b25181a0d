"""
Usage formatter tests: exact layout, ordering, wrapping and purity.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from argot import *


class TestUsageLayout(TestCase):

    def setUp(self):
        self.registry = Registry("prog")
        self.registry.option(["output", "o"], "PATH", "Where to write")
        self.registry.flag("v", False, "Verbose")
        self.registry.parameter("input")
        self.registry.multi_parameter("rest", optional=True)

    def testExactLayout(self):
        self.assertEqual(
            self.registry.usage_string(),
            "Usage: prog [OPTIONS] input [rest] ...\n"
            "\n"
            "OPTIONS\n"
            "\n"
            "-o PATH\n"
            "--output PATH Where to write\n"
            "\n"
            "-v" + " " * 12 + "Verbose\n"
            "\n"
        )

    def testMessageComesFirst(self):
        self.assertTrue(self.registry.usage_string("Oops").startswith("Oops\n\nUsage: prog [OPTIONS]"))

    def testRenderingIsPure(self):
        self.assertEqual(self.registry.usage_string(), self.registry.usage_string())
        self.assertEqual(self.registry.usage_string("x"), usage_string(self.registry, "x"))

    def testParametersOnly(self):
        registry = Registry("prog")
        registry.parameter("a")
        registry.parameter("b", optional=True)
        self.assertEqual(registry.usage_string(), "Usage: prog a [b]\n")

    def testMultiOptionNote(self):
        registry = Registry("prog")
        registry.multi_option("u", "NAME", "Recipient")
        self.assertIn("-u NAME Recipient (May be specified multiple times.)\n", registry.usage_string())

    def testOptionWithoutDescription(self):
        registry = Registry("prog")
        registry.flag("a")
        registry.flag("bee", False, "B")
        self.assertIn("\n-a\n", registry.usage_string())

    def testDescriptionWrapsWithHangingIndent(self):
        registry = Registry("prog", width=30)
        registry.option("x", "X", "alpha beta gamma delta epsilon zeta")
        self.assertTrue(registry.usage_string().endswith(
            "-x X alpha beta gamma delta\n"
            "     epsilon zeta\n"
            "\n"
        ))

    def testWordsAreNeverSplit(self):
        registry = Registry("prog", width=40)
        registry.option("configuration-directory", "DIRECTORY", "Where settings live")
        text = registry.usage_string()
        self.assertIn("--configuration-directory DIRECTORY Where\n", text)
        self.assertIn("\n" + " " * 36 + "settings\n", text)
        self.assertIn("\n" + " " * 36 + "live\n", text)

    def testHyphenatedWordsAreNotSplit(self):
        registry = Registry("prog", width=28)
        registry.flag("x", False, "a very-long-hyphenated-word")
        self.assertIn("-x a\n   very-long-hyphenated-word\n", registry.usage_string())


class TestUsageOrdering(TestCase):

    def declare(self, registry):
        registry.flag("z", False, "Last letter")
        registry.flag("a", False, "First letter")
        return registry.usage_string()

    def testLexicalByDefault(self):
        text = self.declare(Registry("prog"))
        self.assertLess(text.index("-a "), text.index("-z "))

    def testInsertionOrder(self):
        text = self.declare(Registry("prog", ordering=Ordering.INSERTION))
        self.assertLess(text.index("-z "), text.index("-a "))

    def testCompact(self):
        registry = Registry("prog", compact=True)
        registry.flag("a", False, "A")
        registry.flag("b", False, "B")
        self.assertEqual(registry.usage_string(), "Usage: prog [OPTIONS]\n\nOPTIONS\n\n-a A\n-b B\n")


if __name__ == "__main__":
    unittest.main()
