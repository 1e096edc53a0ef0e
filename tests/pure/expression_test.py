import dataclasses
import unittest

from lambdastep.pure.expression import Abstraction, Application, Symbol, app, lam, sym


class SymbolTestCase(unittest.TestCase):

    def test_equality(self):
        self.assertEqual(Symbol("x"), sym("x"))
        self.assertNotEqual(sym("x"), sym("y"))
        self.assertEqual({sym("xy"): 1}[Symbol("xy")], 1)

    def test_immutable(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            sym("x").identifier = "y"


class AbstractionTestCase(unittest.TestCase):

    def test_init(self):
        self.assertEqual(Abstraction(Symbol("x"), Symbol("x")), lam("x", sym("x")))

        should_raise = [("x", sym("x")), (sym("x"), "x"), (sym("x"), None)]
        for parameter, body in should_raise:
            self.assertRaises(TypeError, Abstraction, parameter, body)

    def test_str(self):
        cases = {
            "λx.x": lam("x", sym("x")),
            "λx.λy.x": lam("x", lam("y", sym("x"))),
            "λf.(λx.x f)": lam("f", app(lam("x", sym("x")), sym("f"))),
        }
        for expected, case in cases.items():
            self.assertEqual(expected, str(case))


class ApplicationTestCase(unittest.TestCase):

    def test_init(self):
        identity = lam("x", sym("x"))
        self.assertEqual(Application(identity, sym("y")), app(identity, sym("y")))

        should_raise = [
            (sym("x"), sym("y")),
            (app(identity, sym("y")), sym("z")),
            (identity, "y"),
        ]
        for function, argument in should_raise:
            self.assertRaises(TypeError, Application, function, argument)

    def test_str(self):
        cases = {
            "(λx.x y)": app(lam("x", sym("x")), sym("y")),
            "(λx.x λy.y)": app(lam("x", sym("x")), lam("y", sym("y"))),
            "(λx.x (λy.y z))": app(lam("x", sym("x")), app(lam("y", sym("y")), sym("z"))),
        }
        for expected, case in cases.items():
            self.assertEqual(expected, str(case))

    def test_structural_equality(self):
        first = app(lam("x", lam("y", sym("x"))), sym("a"))
        second = app(lam("x", lam("y", sym("x"))), sym("a"))
        self.assertEqual(first, second)
        self.assertEqual(hash(first), hash(second))
        self.assertNotEqual(first, app(lam("x", lam("y", sym("y"))), sym("a")))


if __name__ == '__main__':
    unittest.main()
