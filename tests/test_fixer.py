"""Tests for the fix generator."""

from ready_to_ship.fixer import ENV_EXAMPLE_TEMPLATE, README_TEMPLATE, apply_fixes, generate_fixes
from ready_to_ship.models import FixStatus, FixType, IssueKind, issue, warning


class TestGenerateFixes:
    """Test mapping findings to fix actions."""

    def test_env_example_template(self):
        actions = generate_fixes([warning(IssueKind.ENV_EXAMPLE_MISSING, detail="recommended")])

        assert len(actions) == 1
        assert actions[0].fix_type == FixType.CREATE_FILE
        assert actions[0].file == ".env.example"
        assert actions[0].content == ENV_EXAMPLE_TEMPLATE

    def test_identical_actions_emitted_once(self):
        """Test env and project both reporting .env.example yield one action."""
        actions = generate_fixes([
            warning(IssueKind.ENV_EXAMPLE_MISSING, detail="recommended"),
            issue(IssueKind.ENV_EXAMPLE_MISSING, detail="required"),
            issue(IssueKind.README_MISSING),
            warning(IssueKind.README_TOO_SHORT, file="README.md"),
        ])

        assert [a.file for a in actions] == [".env.example", "README.md"]

    def test_suggestions(self):
        actions = generate_fixes([
            issue(IssueKind.WEAK_SECRET, subject="JWT_SECRET"),
            issue(IssueKind.MISSING_ENV_VAR, subject="DATABASE_URL"),
            issue(IssueKind.SECURITY_HEADERS_MISSING),
            warning(IssueKind.CORS_MISSING),
            issue(IssueKind.CORS_WILDCARD, file="app.js"),
            warning(IssueKind.RATE_LIMIT_MISSING),
            issue(IssueKind.MISSING_HEALTH_ENDPOINT),
        ])

        assert all(a.fix_type == FixType.SUGGESTION for a in actions)
        descriptions = [a.description for a in actions]
        assert "randomBytes(32)" in descriptions[0]
        assert "JWT_SECRET" in descriptions[0]
        assert descriptions[1] == "Add DATABASE_URL to your .env file"
        assert "helmet" in descriptions[2]
        assert "npm install cors" in descriptions[3]
        assert "express-rate-limit" in descriptions[4]
        assert "/health" in descriptions[5]
        # the two CORS findings share one suggestion
        assert len(actions) == 6

    def test_unfixable_findings_are_ignored(self):
        actions = generate_fixes([
            issue(IssueKind.UNPROTECTED_ROUTE, method="GET", path="/admin", file="app.js", line=3),
            warning(IssueKind.LOCK_FILE_MISSING),
        ])

        assert actions == []


class TestApplyFixes:
    """Test dry-run and apply modes."""

    def test_dry_run_writes_nothing(self, tmp_path):
        actions = generate_fixes([issue(IssueKind.README_MISSING), issue(IssueKind.SECURITY_HEADERS_MISSING)])

        response = apply_fixes(actions, tmp_path)

        assert response.dry_run is True
        assert [r.status for r in response.results] == [FixStatus.WOULD_CREATE, FixStatus.SUGGESTION]
        assert not (tmp_path / "README.md").exists()
        assert response.summary.startswith("Dry-run complete.")

    def test_apply_creates_files(self, tmp_path):
        actions = generate_fixes([issue(IssueKind.README_MISSING), warning(IssueKind.ENV_EXAMPLE_MISSING)])

        response = apply_fixes(actions, tmp_path, dry_run=False)

        assert [r.status for r in response.results] == [FixStatus.CREATED, FixStatus.CREATED]
        assert (tmp_path / "README.md").read_text() == README_TEMPLATE
        assert (tmp_path / ".env.example").read_text() == ENV_EXAMPLE_TEMPLATE
        assert response.summary == "Created 2 file(s), 0 suggestion(s)"

    def test_apply_never_overwrites(self, tmp_path):
        (tmp_path / "README.md").write_text("# Mine\n")
        actions = generate_fixes([warning(IssueKind.README_TOO_SHORT, file="README.md")])

        response = apply_fixes(actions, tmp_path, dry_run=False)

        assert response.results[0].status == FixStatus.SKIPPED
        assert response.results[0].reason == "File already exists"
        assert (tmp_path / "README.md").read_text() == "# Mine\n"
