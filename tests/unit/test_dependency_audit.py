"""Tests for security_scanner.checks.dependency_audit: manifest hygiene."""

import json
from unittest.mock import patch

from conftest import write_files

from security_scanner.checks.dependency_audit import (
    _check_package_json,
    _check_requirements,
    run,
)
from security_scanner.models import Category, Severity


# ---------------------------------------------------------------------------
# package.json
# ---------------------------------------------------------------------------

class TestPackageJson:
    def test_wildcard_versions_are_high(self, tmp_path):
        write_files(tmp_path, {"package.json": json.dumps({
            "dependencies": {"lodash": "*", "react": "^18.2.0"},
            "devDependencies": {"jest": "29.x", "eslint": "8.*"},
        })})
        findings = _check_package_json(str(tmp_path))

        assert len(findings) == 2
        assert all(f.severity == Severity.HIGH for f in findings)
        assert all(f.title == "Wildcard version dependency" for f in findings)
        assert findings[0].details.startswith("lodash: *")
        assert "eslint: 8.*" in findings[1].details

    def test_findings_are_repository_wide(self, tmp_path):
        write_files(tmp_path, {"package.json": '{"dependencies": {"a": "*"}}'})
        finding = _check_package_json(str(tmp_path))[0]
        assert finding.category == Category.DEPENDENCIES
        assert finding.file is None
        assert finding.line is None

    def test_no_dependencies_is_info(self, tmp_path):
        write_files(tmp_path, {"package.json": '{"name": "empty", "version": "1.0.0"}'})
        findings = _check_package_json(str(tmp_path))
        assert len(findings) == 1
        assert findings[0].severity == Severity.INFO
        assert findings[0].title == "No dependencies found"

    def test_empty_dependency_maps_count_as_none(self, tmp_path):
        write_files(tmp_path, {"package.json": '{"dependencies": {}, "devDependencies": {}}'})
        findings = _check_package_json(str(tmp_path))
        assert [f.title for f in findings] == ["No dependencies found"]

    def test_dev_dependency_overrides_same_name(self, tmp_path):
        write_files(tmp_path, {"package.json": json.dumps({
            "dependencies": {"shared": "*"},
            "devDependencies": {"shared": "1.2.3"},
        })})
        assert _check_package_json(str(tmp_path)) == []

    def test_pinned_manifest_is_clean(self, tmp_path):
        write_files(tmp_path, {"package.json": '{"dependencies": {"express": "4.18.2"}}'})
        assert _check_package_json(str(tmp_path)) == []

    def test_invalid_json_is_skipped(self, tmp_path):
        write_files(tmp_path, {"package.json": "{not json"})
        assert _check_package_json(str(tmp_path)) == []

    def test_non_string_versions_ignored(self, tmp_path):
        write_files(tmp_path, {"package.json": '{"dependencies": {"odd": 3}}'})
        assert _check_package_json(str(tmp_path)) == []


# ---------------------------------------------------------------------------
# requirements.txt
# ---------------------------------------------------------------------------

class TestRequirements:
    def test_unpinned_lines_are_medium(self, tmp_path):
        write_files(tmp_path, {"requirements.txt": "\n".join([
            "# comment",
            "",
            "requests==2.31.0",
            "django>=4.2",
            "attrs~=23.1",
            "flask",
            "numpy<2",
        ])})
        findings = _check_requirements(str(tmp_path))

        assert [f.details.split(" - ")[0] for f in findings] == ["flask", "numpy<2"]
        assert all(f.severity == Severity.MEDIUM for f in findings)
        assert all(f.title == "Unpinned Python dependency" for f in findings)

    def test_indented_comment_skipped(self, tmp_path):
        write_files(tmp_path, {"requirements.txt": "   # just a note\nrequests==2.0\n"})
        assert _check_requirements(str(tmp_path)) == []

    def test_pip_options_skipped(self, tmp_path):
        write_files(tmp_path, {"requirements.txt": "-r base.txt\n--index-url https://pypi.org/simple\n"})
        assert _check_requirements(str(tmp_path)) == []

    def test_editable_and_vcs_installs_flagged(self, tmp_path):
        write_files(tmp_path, {"requirements.txt": (
            "-e git+https://github.com/x/y.git#egg=y\n"
            "requests==2.0\n"
        )})
        findings = _check_requirements(str(tmp_path))

        assert len(findings) == 1
        assert findings[0].severity == Severity.MEDIUM
        assert findings[0].details.startswith("-e git+https://github.com/x/y.git#egg=y")

    def test_option_with_equals_skipped(self, tmp_path):
        write_files(tmp_path, {"requirements.txt": "--extra-index-url=https://example.org/simple\n"})
        assert _check_requirements(str(tmp_path)) == []


# ---------------------------------------------------------------------------
# run() dispatcher
# ---------------------------------------------------------------------------

class TestRunDispatcher:
    def test_no_manifests_no_findings(self, tmp_path):
        assert run(str(tmp_path)) == []

    @patch("security_scanner.checks.dependency_audit._check_requirements", return_value=[])
    @patch("security_scanner.checks.dependency_audit._check_package_json", return_value=[])
    @patch("security_scanner.checks.dependency_audit.os.path.isfile")
    def test_runs_package_json_check_only_when_present(self, mock_isfile, mock_pkg, mock_req):
        mock_isfile.side_effect = lambda p: p.endswith("package.json")

        run("/fake")
        mock_pkg.assert_called_once_with("/fake")
        mock_req.assert_not_called()

    @patch("security_scanner.checks.dependency_audit._check_requirements", return_value=[])
    @patch("security_scanner.checks.dependency_audit._check_package_json", return_value=[])
    @patch("security_scanner.checks.dependency_audit.os.path.isfile", return_value=True)
    def test_runs_both_when_both_exist(self, mock_isfile, mock_pkg, mock_req):
        run("/fake")
        mock_pkg.assert_called_once()
        mock_req.assert_called_once()

    def test_package_json_findings_come_first(self, tmp_path):
        write_files(tmp_path, {
            "package.json": '{"dependencies": {"a": "*"}}',
            "requirements.txt": "flask\n",
        })
        titles = [f.title for f in run(str(tmp_path))]
        assert titles == ["Wildcard version dependency", "Unpinned Python dependency"]
