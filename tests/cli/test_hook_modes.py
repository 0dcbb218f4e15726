"""End-to-end tests of the hook, scan and pattern modes."""

import io

from secretgate.cli import main

AWS_SECRET_LINE = "accessKey=wJalrXUtnFEMI/K7MDENG/bPxRfiCYEXAMPLEKEY"

RC_WITH_FILENAME_DETECTOR_IGNORED = """
fileignoreconfig:
- filename: private.pem
  checksum: 82573aa5c95213d5f38dbb24681c1358696604f800e10fa65260b7226382dcff
  ignore_detectors: [filename]
"""

RC_WITH_FILECONTENT_DETECTOR_IGNORED = """
fileignoreconfig:
- filename: private.pem
  checksum: 82573aa5c95213d5f38dbb24681c1358696604f800e10fa65260b7226382dcff
  ignore_detectors: [filecontent]
"""

RC_WITH_CORRECT_CHECKSUM = """
fileignoreconfig:
- filename: private.pem
  checksum: 82573aa5c95213d5f38dbb24681c1358696604f800e10fa65260b7226382dcff
  ignore_detectors: []
"""

RC_WITH_STALE_CHECKSUM = """
fileignoreconfig:
- filename: private.pem
  checksum: 05db785bf1e1712f69b81eeb9956bd797b956e7179ebe3cb7bb2cd9be37a24c
  ignore_detectors: []
"""


def run_pre_push(git_repo, *extra_args):
    stdin = io.StringIO(
        f"master {git_repo.latest_commit()} master {git_repo.earliest_commit()}\n"
    )
    stdout = io.StringIO()
    code = main(list(extra_args), stdin=stdin, stdout=stdout)
    return code, stdout.getvalue()


def run_cli(*args):
    stdout = io.StringIO()
    code = main(list(args), stdin=io.StringIO(""), stdout=stdout)
    return code, stdout.getvalue()


class TestPrePush:
    """Default mode: refs on stdin."""

    def test_no_outgoing_changes(self, git_repo):
        git_repo.setup_baseline("simple-file")
        assert run_cli() == (0, "")

    def test_simple_file_passes(self, git_repo):
        git_repo.setup_baseline("simple-file")
        assert run_pre_push(git_repo) == (0, "")

    def test_private_key_file_fails(self, git_repo):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("private.pem", "secret")
        git_repo.add_and_commit(".", "add private key")

        code, out = run_pre_push(git_repo)

        assert code == 1
        assert "private.pem" in out
        assert "fileignoreconfig:" in out

    def test_secret_content_fails(self, git_repo):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("contains_keys.properties", AWS_SECRET_LINE)
        git_repo.add_and_commit(".", "add private key as content")

        code, out = run_pre_push(git_repo)

        assert code == 1
        assert AWS_SECRET_LINE in out

    def test_suppressed_pem_passes(self, git_repo):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("private.pem", "secret")
        git_repo.create_file(".secretgaterc", RC_WITH_CORRECT_CHECKSUM)
        git_repo.add_and_commit("private.pem", "add private key")

        assert run_pre_push(git_repo) == (0, "")

    def test_stale_suppression_fails(self, git_repo):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("private.pem", "secret")
        git_repo.create_file(".secretgaterc", RC_WITH_STALE_CHECKSUM)
        git_repo.add_and_commit("private.pem", "add private key")

        code, _ = run_pre_push(git_repo)
        assert code == 1

    def test_only_filename_ignored_still_fails_on_content(self, git_repo):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("private.pem", AWS_SECRET_LINE)
        git_repo.create_file(".secretgaterc", RC_WITH_FILENAME_DETECTOR_IGNORED)
        git_repo.add_and_commit("private.pem", "add private key")

        code, out = run_pre_push(git_repo)

        assert code == 1
        assert AWS_SECRET_LINE in out
        assert "failed checks against the pattern" not in out

    def test_only_filecontent_ignored_still_fails_on_name(self, git_repo):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("private.pem", AWS_SECRET_LINE)
        git_repo.create_file(".secretgaterc", RC_WITH_FILECONTENT_DETECTOR_IGNORED)
        git_repo.add_and_commit("private.pem", "add private key")

        code, out = run_pre_push(git_repo)

        assert code == 1
        assert "failed checks against the pattern" in out
        assert AWS_SECRET_LINE not in out.split("fileignoreconfig:")[0]

    def test_explicit_ignore_file(self, git_repo, tmp_path_factory):
        rc = tmp_path_factory.mktemp("rc") / "suppressions.yml"
        rc.write_text(RC_WITH_CORRECT_CHECKSUM)
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("private.pem", "secret")
        git_repo.add_and_commit("private.pem", "add private key")

        assert run_pre_push(git_repo, "--ignore-file", str(rc)) == (0, "")


class TestPreCommit:
    """--githook pre-commit checks the staged diff only."""

    def test_staged_secret_fails(self, git_repo):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("sample.txt", "password=somepassword \n")
        git_repo.add()

        code, out = run_cli("--githook", "pre-commit")

        assert code == 1
        assert "password=somepassword" in out

    def test_staged_secret_with_leading_plus_fails(self, git_repo):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("notes.txt", "++password=somepassword\n")
        git_repo.add()

        code, out = run_cli("--githook", "pre-commit")

        assert code == 1
        assert "++password=somepassword" in out

    def test_secret_only_in_history_passes(self, git_repo):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("sample.txt", "password=somepassword \n")
        git_repo.add_and_commit(".", "Initial Commit With Secret")
        git_repo.append_file("sample.txt", "some text \n")
        git_repo.add()

        assert run_cli("--githook", "pre-commit") == (0, "")

    def test_staged_private_key_fails(self, git_repo):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("private.pem", "secret")
        git_repo.add()

        code, _ = run_cli("--githook", "pre-commit")
        assert code == 1


class TestScanAndPattern:
    """Whole-repository and glob modes."""

    def test_scan_tracked_files(self, git_repo):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("private.pem", "secret")
        git_repo.add_and_commit(".", "add key")

        code, out = run_cli("--scan")

        assert code == 1
        assert "private.pem" in out

    def test_pattern_finds_secret_key(self, git_repo):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("private.pem", "secret")

        code, _ = run_cli("--pattern", "./*.*")
        assert code == 1

    def test_pattern_finds_nested_secret_key(self, git_repo):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("some-dir/private.pem", "secret")

        code, out = run_cli("--pattern", "./**/*.*")

        assert code == 1
        assert "some-dir/private.pem" in out

    def test_pattern_finds_secret_in_nested_file(self, git_repo):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("some-dir/some-file.txt", AWS_SECRET_LINE)

        code, _ = run_cli("--pattern", "./**/*.*")
        assert code == 1


class TestChecksum:
    """--checksum prints suppression entries."""

    def test_no_matching_files(self, git_repo):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("private.pem", "secret")
        git_repo.create_file("sample.txt", "password")

        code, out = run_cli("--checksum", "*txt1")

        assert code == 1
        assert out == ""

    def test_prints_entries(self, git_repo):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("private.pem", "secret")

        code, out = run_cli("--checksum", "*.pem")

        assert code == 0
        assert "- filename: private.pem" in out
        assert "checksum: 82573aa5c95213d5f38dbb24681c1358696604f800e10fa65260b7226382dcff" in out


class TestErrors:
    """Structural errors stop the run with a friendly message."""

    def test_malformed_suppression_file(self, git_repo, capsys):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file("private.pem", "secret")
        git_repo.create_file(".secretgaterc", "fileignoreconfig: [\n- filename: private.pem\n")
        git_repo.add_and_commit("private.pem", "add private key")

        code, out = run_pre_push(git_repo)

        err = capsys.readouterr().err
        assert code == 1
        assert out == ""
        assert "CONFIG ERROR:" in err
        assert "Traceback" not in err

    def test_missing_explicit_ignore_file(self, git_repo, capsys):
        git_repo.setup_baseline("simple-file")
        missing = git_repo.root / "missing.yml"

        code, _ = run_cli("--ignore-file", str(missing))

        err = capsys.readouterr().err
        assert code == 1
        assert "CONFIG ERROR:" in err
        assert "not found" in err.lower()

    def test_unknown_detector_in_suppression_file(self, git_repo, capsys):
        git_repo.setup_baseline("simple-file")
        git_repo.create_file(
            ".secretgaterc",
            "fileignoreconfig:\n- filename: a\n  checksum: b\n  ignore_detectors: [entropy]\n",
        )

        code, _ = run_cli()

        assert code == 1
        assert "CONFIG ERROR:" in capsys.readouterr().err

    def test_git_failure(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)

        code, _ = run_cli("--githook", "pre-commit")

        assert code == 1
        assert "GIT ERROR:" in capsys.readouterr().err


def test_version(capsys):
    code, out = run_cli("--version")
    assert code == 0
    assert out.strip()
