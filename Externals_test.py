# Externals_test.py
import contextlib, io, os, shutil, stat, tempfile, unittest
from external_runner import (run_external, resolve_executable, execute, echo_only,
                             exit_status, NOT_EXEC, NOT_FOUND)

@unittest.skipUnless(os.name == "posix", "POSIX commands")
class TestExternals(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    def script(self, name, body, mode):
        path = os.path.join(self.tmp, name)
        with open(path, "w") as f:
            f.write(body)
        os.chmod(path, mode)
        return path

    def test_path_lookup(self):
        self.assertIsNotNone(resolve_executable("sh"))
        self.assertIsNone(resolve_executable("./__missing__"))

    def test_argv_quoting(self):
        code, out, err = run_external(["echo", "a b", "c;d"], capture=True)
        self.assertEqual(code, 0)
        self.assertEqual(out, "a b c;d\n")

    def test_stderr_visible(self):
        code, out, err = run_external(["ls", "/definitely-not-real-xyz"], capture=True)
        self.assertNotEqual(code, 0)
        self.assertTrue(err.strip() != "")
        self.assertEqual(out, "")

    def test_not_found_127(self):
        code, _, err = run_external(["__no_such_cmd__"], capture=True)
        self.assertEqual(code, NOT_FOUND)
        self.assertIn("command not found", err)

    def test_permission_126_or_127(self):
        path = self.script("noexec.sh", "#!/bin/sh\necho hi\n", stat.S_IRUSR | stat.S_IWUSR)
        code, _, _ = run_external([path], capture=True)
        self.assertIn(code, (NOT_EXEC, NOT_FOUND))

    def test_shebang_exec(self):
        path = self.script("hello.sh", '#!/bin/sh\necho "hello $1"\nexit 4\n',
                           stat.S_IRUSR | stat.S_IWUSR | stat.S_IXUSR)
        code, out, err = run_external([path, "there"], capture=True)
        self.assertEqual(code, 4)
        self.assertEqual(out, "hello there\n")
        self.assertEqual(err, "")

    def test_killed_by_signal_is_failure(self):
        code, _, _ = run_external(["sh", "-c", "kill -TERM $$"], capture=True)
        self.assertEqual(code, 128 + 15)

    def test_execute_returns_exit_code(self):
        self.assertEqual(execute(["sh", "-c"], ["exit 3"]), 3)
        self.assertEqual(execute(["true"], []), 0)

    def test_execute_reports_launch_errors(self):
        err = io.StringIO()
        with contextlib.redirect_stderr(err):
            code = execute(["__no_such_cmd__"], ["x"])
        self.assertEqual(code, NOT_FOUND)
        self.assertEqual(err.getvalue(), "__no_such_cmd__: command not found\n")


class TestHelpers(unittest.TestCase):
    def test_exit_status(self):
        self.assertEqual(exit_status(0), 0)
        self.assertEqual(exit_status(2), 2)
        self.assertEqual(exit_status(-9), 137)

    def test_empty_argv(self):
        self.assertEqual(run_external([], capture=True)[0], NOT_FOUND)

    def test_echo_only(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            self.assertEqual(echo_only(["grep", "-r"], ["a b", "src"]), 0)
        self.assertEqual(out.getvalue(), "grep -r 'a b' src\n")

if __name__ == "__main__":
    unittest.main(verbosity=2)
