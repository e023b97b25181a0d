"""
Converter tests: accepted forms, rejected forms and the exact rejection messages.

Converters receive the owning declaration only for message context, so these tests
use stand-alone declarations rather than a registry.
"""
import math
import pathlib
import unittest
from unittest import TestCase

from argot import *


class TestIntegerConverters(TestCase):

    def setUp(self):
        self.option = SingleValueOption("n", "N")

    def testSignedDecimal(self):
        self.assertEqual(to_int("42", self.option), 42)
        self.assertEqual(to_int("-7", self.option), -7)
        self.assertEqual(to_int("+7", self.option), 7)

    def testRejectsNonDigits(self):
        for token in ("abc", "1.5", " 1", "1_000", "", "0x10"):
            with self.subTest(token=token):
                with self.assertRaises(ConversionError) as context:
                    to_int(token, self.option)
                self.assertEqual(str(context.exception), 'Cannot convert argument "%s" to a number.' % token)

    def testShortRange(self):
        self.assertEqual(to_short("32767", self.option), 32767)
        self.assertEqual(to_short("-32768", self.option), -32768)
        with self.assertRaises(ConversionError) as context:
            to_short("99999", self.option)
        self.assertEqual(str(context.exception), 'Option "-n": "99999" is out of range for a 16-bit integer.')

    def testIntRange(self):
        self.assertEqual(to_int("2147483647", self.option), 2147483647)
        with self.assertRaises(ConversionError):
            to_int("2147483648", self.option)

    def testLongRange(self):
        self.assertEqual(to_long("9223372036854775807", self.option), 9223372036854775807)
        with self.assertRaises(ConversionError):
            to_long("9223372036854775808", self.option)

    def testParameterSubject(self):
        parameter = SingleValueParameter("count")
        with self.assertRaises(ConversionError) as context:
            to_short("70000", parameter)
        self.assertTrue(str(context.exception).startswith('Parameter "count":'))


class TestRealConverters(TestCase):

    def setUp(self):
        self.option = SingleValueOption("ratio", "R")

    def testDouble(self):
        self.assertEqual(to_double("0.25", self.option), 0.25)
        self.assertEqual(to_double("1e3", self.option), 1000.0)

    def testDoubleRejectsGarbage(self):
        with self.assertRaises(ConversionError) as context:
            to_double("half", self.option)
        self.assertEqual(str(context.exception), 'Cannot convert argument "half" to a number.')

    def testDoubleRejectsOverflow(self):
        with self.assertRaises(ConversionError):
            to_double("1e400", self.option)

    def testDoubleAcceptsSpelledInfinity(self):
        self.assertTrue(math.isinf(to_double("inf", self.option)))

    def testFloatRoundsToSinglePrecision(self):
        self.assertNotEqual(to_float("0.1", self.option), 0.1)
        self.assertAlmostEqual(to_float("0.1", self.option), 0.1, places=6)

    def testFloatRejectsOverflow(self):
        with self.assertRaises(ConversionError) as context:
            to_float("1e39", self.option)
        self.assertEqual(str(context.exception), 'Option "--ratio": "1e39" is out of range for a 32-bit float.')


class TestCharacterConverters(TestCase):

    def setUp(self):
        self.option = SingleValueOption("c", "C")

    def testChar(self):
        self.assertEqual(to_char("x", self.option), "x")

    def testCharRejectsLongerToken(self):
        with self.assertRaises(ConversionError) as context:
            to_char("ab", self.option)
        self.assertEqual(str(context.exception), 'Option "-c": Cannot parse "ab" to a character.')

    def testCharRejectsEmptyToken(self):
        with self.assertRaises(ConversionError):
            to_char("", self.option)


class TestByteConverter(TestCase):

    def setUp(self):
        self.option = SingleValueOption("b", "B")

    def testBounds(self):
        self.assertEqual(to_byte("0", self.option), 0)
        self.assertEqual(to_byte("255", self.option), 255)

    def testTooLarge(self):
        with self.assertRaises(ConversionError) as context:
            to_byte("300", self.option)
        self.assertEqual(
            str(context.exception),
            'Option "-b": "300" results in a number that is too large for a byte.'
        )

    def testNegative(self):
        with self.assertRaises(ConversionError):
            to_byte("-1", self.option)


class TestPassThroughConverters(TestCase):

    def testStrIsIdentity(self):
        self.assertEqual(to_str(" spaced ", SingleValueParameter("p")), " spaced ")

    def testBoolIsIdentity(self):
        flag = FlagOption("v")
        self.assertIs(to_bool(True, flag), True)
        self.assertIs(to_bool(False, flag), False)


class TestConverterAdapter(TestCase):

    def testWrapsPlainCallable(self):
        convert = converter(pathlib.Path)
        self.assertEqual(convert("a/b", SingleValueOption("o", "PATH")), pathlib.Path("a/b"))

    def testFoldsValueError(self):
        convert = converter(int)
        with self.assertRaises(ConversionError) as context:
            convert("x", SingleValueOption("n", "N"))
        self.assertTrue(str(context.exception).startswith('Option "-n": Cannot convert "x"'))

    def testOtherErrorsPropagate(self):
        def explode(token):
            raise KeyError(token)

        with self.assertRaises(KeyError):
            converter(explode)("x", SingleValueOption("n", "N"))

    def testRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            converter("int")


if __name__ == "__main__":
    unittest.main()
