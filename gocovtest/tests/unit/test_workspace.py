"""Unit tests for the coverage workspace."""

import pytest

from gocovtest.src import workspace as workspace_module
from gocovtest.src.models import RunnerSettings
from gocovtest.src.workspace import coverage_workspace


@pytest.mark.unit
class TestCoverageWorkspace:
    def test_allocates_and_removes(self, diagnostics):
        with coverage_workspace(diagnostics=diagnostics) as ws:
            assert ws.directory.is_dir()
            assert ws.cover_file == ws.directory / "cover.cov"
            ws.cover_file.write_text("mode: set\n")
            directory = ws.directory

        assert not directory.exists()
        assert diagnostics.warnings == []

    def test_settings_control_names(self, diagnostics):
        settings = RunnerSettings(cover_filename="profile.out", temp_prefix="cov-run-")
        with coverage_workspace(settings, diagnostics=diagnostics) as ws:
            assert ws.directory.name.startswith("cov-run-")
            assert ws.cover_file.name == "profile.out"

    def test_removed_when_block_raises(self, diagnostics):
        with pytest.raises(ValueError):
            with coverage_workspace(diagnostics=diagnostics) as ws:
                directory = ws.directory
                raise ValueError("stage failed")

        assert not directory.exists()

    def test_distinct_per_run(self, diagnostics):
        with coverage_workspace(diagnostics=diagnostics) as first:
            with coverage_workspace(diagnostics=diagnostics) as second:
                assert first.directory != second.directory
                assert first.cover_file != second.cover_file

    def test_removal_failure_is_warning(self, diagnostics, monkeypatch):
        def failing_rmtree(path, *args, **kwargs):
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr(workspace_module.shutil, "rmtree", failing_rmtree)

        with coverage_workspace(diagnostics=diagnostics) as ws:
            directory = ws.directory

        monkeypatch.undo()
        assert len(diagnostics.warnings) == 1
        assert "failed to clean up temp directory" in diagnostics.warnings[0]
        assert str(directory) in diagnostics.warnings[0]
        directory.rmdir()

    def test_removal_failure_does_not_mask_error(self, diagnostics, monkeypatch):
        def busy_rmtree(path, *args, **kwargs):
            raise OSError("busy")

        monkeypatch.setattr(workspace_module.shutil, "rmtree", busy_rmtree)

        with pytest.raises(KeyError):
            with coverage_workspace(diagnostics=diagnostics) as ws:
                directory = ws.directory
                raise KeyError("primary")

        monkeypatch.undo()
        assert len(diagnostics.warnings) == 1
        directory.rmdir()
