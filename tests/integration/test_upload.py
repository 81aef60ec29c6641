"""Integration tests for uploads against a fake s3cmd executable."""

import sys
import textwrap

import pytest
from typer.testing import CliRunner

from plume.contexts.publishing.uploader import upload_site
from scripts.s3_upload import app as upload_app

skip_on_windows = pytest.mark.skipif(
    sys.platform == "win32", reason="fake s3cmd is a POSIX shell script"
)


def make_fake_s3cmd(tmp_path, fail_pattern=None):
    """Write a fake s3cmd that appends its arguments to a file and optionally fails."""
    calls = tmp_path / "s3cmd_calls.txt"
    script = tmp_path / "s3cmd"
    fail_check = ""
    if fail_pattern:
        fail_check = textwrap.dedent(
            f"""\
            case "$*" in
              *"--include {fail_pattern}"*) echo "ERROR: upload refused" >&2; exit 2 ;;
            esac
            """
        )
    script.write_text(
        "#!/bin/sh\n" f'printf "%s\\n" "$*" >> "{calls}"\n' + fail_check + 'echo "Done."\n',
        encoding="utf-8",
    )
    script.chmod(0o755)
    return script, calls


@pytest.fixture
def site_dir(tmp_path):
    site = tmp_path / "output"
    (site / "css").mkdir(parents=True)
    (site / "index.html").write_text("<p>hi</p>", encoding="utf-8")
    (site / "css" / "style.css").write_text("p {}", encoding="utf-8")
    return site


@pytest.mark.integration
@skip_on_windows
def test_upload_with_fake_s3cmd(site_dir, tmp_path):
    """Test a full upload against a fake s3cmd executable."""
    s3cmd, calls = make_fake_s3cmd(tmp_path)

    result = upload_site(site_dir, "my-bucket", s3cmd=str(s3cmd))

    assert result.success, result.errors
    lines = calls.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 4
    assert lines[0].startswith("sync --progress --acl-public --add-header Cache-Control: max-age=1800")
    assert "-m text/css" in lines[1]
    assert "-m text/javascript" in lines[2]
    assert "max-age=86400" in lines[3]
    assert all(f"{site_dir.resolve()}/ s3://my-bucket" in line for line in lines)
    assert all("Done." in p.stdout for p in result.passes)


@pytest.mark.integration
@skip_on_windows
def test_upload_stops_when_s3cmd_fails(site_dir, tmp_path):
    """Test that the upload stops after the first failing pass."""
    s3cmd, calls = make_fake_s3cmd(tmp_path, fail_pattern="*.js")

    result = upload_site(site_dir, "my-bucket", s3cmd=str(s3cmd))

    assert not result.success
    assert [p.returncode for p in result.passes] == [0, 0, 2]
    assert len(calls.read_text(encoding="utf-8").splitlines()) == 3
    assert "upload refused" in result.errors[0]


@pytest.mark.integration
@skip_on_windows
def test_upload_dry_run(site_dir, tmp_path):
    """Test that dry runs pass --dry-run to every s3cmd call."""
    s3cmd, calls = make_fake_s3cmd(tmp_path)

    result = upload_site(site_dir, "my-bucket", s3cmd=str(s3cmd), dry_run=True)

    assert result.success
    assert all(line.endswith("--dry-run") for line in calls.read_text().splitlines())


@pytest.mark.integration
@skip_on_windows
def test_cli_upload_uses_configured_s3cmd(site_dir, tmp_path, monkeypatch):
    """Test that the upload CLI runs the S3CMD executable."""
    s3cmd, calls = make_fake_s3cmd(tmp_path)
    monkeypatch.setattr("plume.contexts.publishing.uploader.S3CMD", str(s3cmd))

    result = CliRunner().invoke(upload_app, [str(site_dir), "my-bucket"])

    assert result.exit_code == 0, result.output
    assert len(calls.read_text().splitlines()) == 4
