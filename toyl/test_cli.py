import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from toyl.classes import Constants
from toyl.cli import main


class TestCli(unittest.TestCase):
    """toyl run / toyl tree"""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.config = self.path("config.ini")
        with open(self.config, "w", encoding="utf-8") as f:
            f.write("[Files]\n")
            f.write(f"source = {self.path('in.txt')}\n")
            f.write(f"out = {self.path('out.txt')}\n")
            f.write(f"tree = {self.path('tree.txt')}\n")
            f.write(f"error = {self.path('outError.txt')}\n")

    def path(self, name):
        return os.path.join(self.tmp.name, name)

    def write_source(self, text, name="in.txt"):
        with open(self.path(name), "w", encoding="utf-8") as f:
            f.write(text)
        return self.path(name)

    def read(self, name):
        with open(self.path(name), encoding="utf-8") as f:
            return f.read()

    def test_run_default_source(self):
        """run without a file reads the configured source and writes three files"""
        self.write_source("int a = 3;\na = a + 4;\nprint(a);\nprint(a / 0);\n")
        self.assertEqual(main(["run", "--config", self.config]), 0)

        self.assertEqual(self.read("out.txt"),
                         "Declared var[0] = 3\nAssigned var[0] = 7\nPrint: 7\nPrint: 0\n")
        self.assertEqual(self.read("outError.txt"), "Error: Division by zero at line 4\n")
        self.assertEqual(self.read("tree.txt").count(Constants.SEPARATOR), 4)

    def test_run_named_source_with_syntax_error(self):
        """a syntax error leaves out.txt and tree.txt empty"""
        source = self.write_source("print(1);\nprint(2)\n", "bad.toyl")
        self.assertEqual(main(["run", source, "--config", self.config]), 0)

        self.assertEqual(self.read("out.txt"), "")
        self.assertEqual(self.read("tree.txt"), "")
        self.assertTrue(self.read("outError.txt").startswith("Error: syntax error at line"))

    def test_run_missing_source(self):
        """an unreadable source is exit status 1"""
        buf = io.StringIO()
        with redirect_stdout(buf):
            status = main(["run", self.path("nope.txt"), "--config", self.config])
        self.assertEqual(status, 1)
        self.assertIn("cannot read", buf.getvalue())

    def test_tree(self):
        """tree prints the statements without running them"""
        source = self.write_source("print(8);\n", "p.toyl")
        buf = io.StringIO()
        with redirect_stdout(buf):
            status = main(["tree", source, "--config", self.config])
        self.assertEqual(status, 0)
        self.assertEqual(buf.getvalue(), "\nprint\n\n     INTEGER(8)\n" + Constants.SEPARATOR)
        self.assertFalse(os.path.exists(self.path("out.txt")))

    def test_usage(self):
        """unknown commands print usage with status 2"""
        buf = io.StringIO()
        with redirect_stdout(buf):
            status = main(["frobnicate"])
        self.assertEqual(status, 2)
        self.assertIn("usage", buf.getvalue())


if __name__ == '__main__':
    unittest.main(verbosity=2)
