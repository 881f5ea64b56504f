"""Tests for the database validator."""

from ready_to_ship.checks.database import db_type_from_url, run_checks
from ready_to_ship.models import IssueKind

POOLED_CONNECTION = """const { Pool } = require('pg');

const pool = new Pool({ connectionString: process.env.DATABASE_URL, max: 10 });
pool.on('error', (err) => console.error('Unexpected database error', err));

module.exports = pool;
"""


def kinds(findings):
    return [f.kind for f in findings]


class TestDbTypeFromUrl:
    """Test database detection from connection URLs."""

    def test_schemes(self):
        assert db_type_from_url("mongodb+srv://cluster.example.net/app") == "MongoDB"
        assert db_type_from_url("postgresql://db.example.com/app") == "PostgreSQL"
        assert db_type_from_url("mysql://db.example.com/app") == "MySQL"
        assert db_type_from_url("redis://cache:6379") == "Redis"
        assert db_type_from_url("sqlite:///tmp/app.db") is None


class TestDatabase:
    """Test database wiring checks."""

    def test_skipped_without_database(self, make_context):
        """Test a project with no database indicators is skipped and passes."""
        result = run_checks(make_context({"package.json": {"dependencies": {"express": "^4.18.0"}}}))

        assert result.skipped is True
        assert result.passed is True
        assert result.counts_as_passed is True
        assert result.issues == []
        assert result.warnings == []

    def test_detects_from_package(self, make_context):
        result = run_checks(make_context({"package.json": {"dependencies": {"mongoose": "^8.0.0"}}}))

        assert result.skipped is False
        assert result.db_type == "MongoDB"
        assert kinds(result.warnings) == [IssueKind.DB_POOLING_MISSING, IssueKind.DB_MIGRATIONS_MISSING]

    def test_localhost_url(self, make_context):
        result = run_checks(make_context({".env": "DATABASE_URL=postgres://localhost:5432/app\n"}))

        assert result.db_type == "PostgreSQL"
        assert kinds(result.warnings) == [IssueKind.DB_LOCALHOST_URL]

    def test_connection_without_error_handling(self, make_context):
        result = run_checks(make_context({
            "package.json": {"dependencies": {"pg": "^8.11.0"}},
            "db/index.js": "const { Client } = require('pg');\nmodule.exports = new Client();\n",
        }))

        assert result.passed is False
        assert kinds(result.issues) == [IssueKind.DB_CONNECTION_HANDLING_MISSING]

    def test_well_configured(self, make_context):
        result = run_checks(make_context({
            ".env": "DATABASE_URL=postgres://db.example.com:5432/app\n",
            "package.json": {"dependencies": {"pg": "^8.11.0"}},
            "db/pool.js": POOLED_CONNECTION,
            "migrations/001_init.sql": "CREATE TABLE orders (id serial primary key);\n",
        }))

        assert result.passed is True
        assert result.issues == []
        assert result.warnings == []
        assert "Database configuration looks good" in result.notes
        assert "Database connection file found" in result.notes
