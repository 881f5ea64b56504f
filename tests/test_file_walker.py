"""Tests for project discovery and file parsing."""

import tempfile
from pathlib import Path

from ready_to_ship.file_walker import (
    compile_glob,
    expand_braces,
    find_files,
    load_package_json,
    match_files,
    parse_env_file,
    parse_env_text,
    read_text,
    walk_repo,
)


class TestWalkRepo:
    """Test repository walking."""

    def test_skips_hidden_and_node_modules(self, make_project):
        """Test hidden dirs, hidden files and node_modules are excluded."""
        root = make_project({
            "src/app.js": "",
            "node_modules/express/index.js": "",
            ".git/config": "",
            ".env": "A=1",
            "routes/users.js": "",
        })

        assert walk_repo(root) == ["routes/users.js", "src/app.js"]

    def test_missing_directory(self):
        """Test walking a path that does not exist."""
        assert walk_repo("/nonexistent/ready-to-ship/project") == []


class TestGlobs:
    """Test glob matching."""

    def test_expand_braces(self):
        assert expand_braces("**/*.{js,ts}") == ["**/*.js", "**/*.ts"]
        assert expand_braces("{a,b}.{x,y}") == ["a.x", "a.y", "b.x", "b.y"]
        assert expand_braces("plain.js") == ["plain.js"]

    def test_double_star_matches_zero_or_more_dirs(self):
        regex = compile_glob("**/routes/**/*.{js,ts}")
        assert regex.fullmatch("routes/users.js")
        assert regex.fullmatch("src/routes/v1/users.ts")
        assert not regex.fullmatch("routes.js")
        assert not regex.fullmatch("routes/users.py")

    def test_single_star_stays_in_segment(self):
        regex = compile_glob("**/error*.js")
        assert regex.fullmatch("errorHandler.js")
        assert regex.fullmatch("lib/errors.js")
        assert not regex.fullmatch("error/handler.js")

    def test_match_files_keeps_input_order(self):
        paths = ["b/app.js", "a/server.ts", "c/readme.md"]
        assert match_files("**/{app,server}.{js,ts}", paths) == ["b/app.js", "a/server.ts"]

    def test_find_files_returns_absolute_paths(self, make_project):
        root = make_project({"src/index.js": "", "src/util.py": ""})
        assert find_files("**/*.js", root) == [root / "src/index.js"]


class TestReadText:
    """Test safe reads."""

    def test_missing_file_is_none(self):
        assert read_text("/nonexistent/file.js") is None

    def test_reads_content(self):
        with tempfile.NamedTemporaryFile(mode="w", suffix=".js", delete=False) as f:
            f.write("module.exports = {};\n")
            f.flush()

            assert read_text(f.name) == "module.exports = {};\n"

        Path(f.name).unlink()


class TestEnvParsing:
    """Test .env parsing."""

    def test_parses_pairs_comments_and_quotes(self):
        text = 'A=1\n# comment\n\nB="quoted value"\n  C = x \n'
        assert parse_env_text(text) == {"A": "1", "B": "quoted value", "C": "x"}

    def test_last_assignment_wins(self):
        assert parse_env_text("A=1\nA=2\n") == {"A": "2"}

    def test_empty_value_is_kept(self):
        assert parse_env_text("JWT_SECRET=\n") == {"JWT_SECRET": ""}

    def test_placeholders_are_not_interpolated(self):
        assert parse_env_text("URL=${BASE}/api\n") == {"URL": "${BASE}/api"}

    def test_missing_file_is_empty(self):
        assert parse_env_file("/nonexistent/.env") == {}


class TestLoadPackageJson:
    """Test package.json loading."""

    def test_missing(self, tmp_path):
        manifest = load_package_json(tmp_path)
        assert manifest.found is False
        assert manifest.dependencies == {}

    def test_malformed(self, make_project):
        root = make_project({"package.json": "{ not json"})
        manifest = load_package_json(root)
        assert manifest.found is True
        assert manifest.malformed is True

    def test_non_object_is_malformed(self, make_project):
        root = make_project({"package.json": "[1, 2]"})
        assert load_package_json(root).malformed is True

    def test_merges_dependency_sections(self, make_project):
        root = make_project({"package.json": {
            "description": "API",
            "scripts": {"start": "node index.js"},
            "dependencies": {"express": "^4.18.0"},
            "devDependencies": {"jest": "^29.0.0"},
        }})

        manifest = load_package_json(root)

        assert manifest.found and not manifest.malformed
        assert manifest.dependencies == {"express": "^4.18.0", "jest": "^29.0.0"}
        assert manifest.scripts == {"start": "node index.js"}
        assert manifest.description == "API"
