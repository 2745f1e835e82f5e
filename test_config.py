# test_config.py
import fnmatch
import os
import shutil
import tempfile
import tomllib
import unittest
from unittest.mock import patch

from config import GlobalConfig, resolve_user_base_path
from llm.provider_abc import load_prompts_from_dir

BASE_PATH = os.path.dirname(os.path.abspath(__file__))


class TestUserBasePath(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.tmp_dir, True)

    def test_env_override_wins(self):
        with patch.dict(os.environ, {"GIT_TIMESHEET_HOME": self.tmp_dir}):
            self.assertEqual(resolve_user_base_path(BASE_PATH), self.tmp_dir)

    def test_source_checkout_uses_script_dir(self):
        with patch.dict(os.environ, {"GIT_TIMESHEET_HOME": ""}):
            self.assertEqual(resolve_user_base_path(BASE_PATH), BASE_PATH)

    def test_installed_copy_uses_working_dir(self):
        # site-packages 中没有 pyproject.toml
        with patch.dict(os.environ, {"GIT_TIMESHEET_HOME": ""}):
            with patch("config.os.getcwd", return_value="/home/jane/work"):
                self.assertEqual(
                    resolve_user_base_path(self.tmp_dir), "/home/jane/work"
                )

    def test_user_files_and_resources_are_separate(self):
        config = GlobalConfig()
        config.SCRIPT_BASE_PATH = "/site-packages"
        config.USER_BASE_PATH = "/home/jane/work"
        self.assertEqual(config.data_root_path, "/home/jane/work/data")
        self.assertEqual(config.prompts_dir, "/site-packages/prompts")
        self.assertEqual(config.templates_dir, "/site-packages/templates")
        self.assertEqual(config.plugins_dir, "/site-packages/plugins")


class TestBundledResources(unittest.TestCase):

    def test_prompts_dir_has_format_prompt(self):
        prompts = load_prompts_from_dir(
            GlobalConfig().prompts_dir, required=["format_commits"]
        )
        self.assertIn("{messages}", prompts["format_commits"])
        self.assertIn("system", prompts)

    def test_missing_required_prompt_raises(self):
        tmp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, tmp_dir, True)
        with self.assertRaises(ValueError):
            load_prompts_from_dir(tmp_dir, required=["format_commits"])


class TestPackaging(unittest.TestCase):
    """pip install 后 prompts/ templates/ plugins/ 必须和模块装在一起"""

    @classmethod
    def setUpClass(cls):
        with open(os.path.join(BASE_PATH, "pyproject.toml"), "rb") as f:
            cls.setuptools = tomllib.load(f)["tool"]["setuptools"]

    def test_resource_dirs_are_packaged(self):
        packages = self.setuptools["packages"]
        package_data = self.setuptools.get("package-data", {})

        for resource_dir in ("prompts", "templates", "plugins"):
            self.assertIn(resource_dir, packages)
            patterns = package_data.get(resource_dir, []) + ["*.py"]
            for filename in os.listdir(os.path.join(BASE_PATH, resource_dir)):
                self.assertTrue(
                    any(fnmatch.fnmatch(filename, p) for p in patterns),
                    f"{resource_dir}/{filename} 不会被打包",
                )

    def test_all_top_level_modules_are_packaged(self):
        modules = set(self.setuptools["py-modules"])
        for filename in os.listdir(BASE_PATH):
            name, ext = os.path.splitext(filename)
            if ext == ".py" and not name.startswith("test_"):
                self.assertIn(name, modules)


if __name__ == "__main__":
    unittest.main()
