"""Tests for the pipeline orchestrator and CLI entry points (featuregen.pipeline).

Covers:
- Pre-flight check of the project marker
- Stage ordering and the GenerationResult
- Idempotent re-runs
- ``featuregen`` and ``featuregen-init`` argument handling
"""

from __future__ import annotations

import io
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from featuregen.config import Config
from featuregen.pipeline import (
    GenerationResult,
    Pipeline,
    PreconditionError,
    build_parser,
    init_main,
    main,
)
from featuregen.reporting import Reporter
from featuregen.scaffolder.templates import ResponseShape
from featuregen.wiring.models import PatchOutcome


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def pipeline(config, catalog, reporter) -> Pipeline:
    return Pipeline(config, catalog, reporter)


@pytest.fixture
def initialised(pipeline) -> Pipeline:
    """Pipeline whose project root already holds the base project."""
    pipeline.init_project()
    return pipeline


# ---------------------------------------------------------------------------
# Pre-flight
# ---------------------------------------------------------------------------


class TestPreflight:
    @pytest.mark.unit
    def test_missing_marker(self, tmp_path, catalog, reporter):
        pipeline = Pipeline(Config(project_root=tmp_path), catalog, reporter)
        with pytest.raises(PreconditionError) as exc_info:
            pipeline.preflight()
        assert exc_info.value.path == tmp_path / "pubspec.yaml"

    @pytest.mark.unit
    def test_run_writes_nothing_without_marker(self, tmp_path, catalog):
        reporter = Reporter(console=Console(file=io.StringIO(), width=200))
        pipeline = Pipeline(Config(project_root=tmp_path), catalog, reporter)
        with pytest.raises(PreconditionError):
            pipeline.run("HomeScreen")
        assert list(tmp_path.iterdir()) == []
        assert reporter.records == []

    @pytest.mark.unit
    def test_marker_present(self, pipeline):
        pipeline.preflight()


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


class TestRun:
    @pytest.mark.unit
    def test_stages_run_in_order(self, pipeline):
        calls: list[str] = []
        pipeline.scaffolder = MagicMock()
        pipeline.scaffolder.generate.side_effect = lambda *a: calls.append("scaffold") or []
        pipeline.routes = MagicMock()
        pipeline.routes.register.side_effect = lambda *a: calls.append("routes") or {}
        pipeline.dependencies = MagicMock()
        pipeline.dependencies.register.side_effect = (
            lambda *a: calls.append("dependencies") or PatchOutcome.INSERTED
        )

        pipeline.run("HomeScreen")

        assert calls == ["scaffold", "routes", "dependencies"]

    @pytest.mark.unit
    def test_identifier_derived_once_and_shared(self, pipeline):
        pipeline.scaffolder = MagicMock(**{"generate.return_value": []})
        pipeline.routes = MagicMock(**{"register.return_value": {}})
        pipeline.dependencies = MagicMock(**{"register.return_value": PatchOutcome.INSERTED})

        result = pipeline.run("UserProfileScreen", ResponseShape.COLLECTION)

        ident = result.identifier
        pipeline.scaffolder.generate.assert_called_once_with(ident, ResponseShape.COLLECTION)
        pipeline.routes.register.assert_called_once_with(ident, ResponseShape.COLLECTION)
        pipeline.dependencies.register.assert_called_once_with(ident, ResponseShape.COLLECTION)

    @pytest.mark.integration
    def test_full_run(self, initialised, config):
        result = initialised.run("HomeScreen")

        assert isinstance(result, GenerationResult)
        assert result.success
        assert len(result.files_created) == 10
        assert result.routes == {
            config.router_path: PatchOutcome.INSERTED,
            config.constants_path: PatchOutcome.INSERTED,
        }
        assert result.dependencies is PatchOutcome.INSERTED

    @pytest.mark.integration
    def test_rerun_is_idempotent(self, initialised, config):
        initialised.run("HomeScreen")
        snapshot = {
            path: path.read_bytes()
            for path in (config.router_path, config.constants_path, config.registration_path)
        }

        second = initialised.run("HomeScreen")

        assert second.files_created == []
        assert set(second.routes.values()) == {PatchOutcome.SKIPPED_DUPLICATE}
        assert second.dependencies is PatchOutcome.SKIPPED_DUPLICATE
        for path, content in snapshot.items():
            assert path.read_bytes() == content

    @pytest.mark.integration
    def test_missing_registration_root_not_fatal(self, pipeline, config):
        result = pipeline.run("HomeScreen")

        assert not result.success
        assert result.dependencies is PatchOutcome.FAILED
        assert len(result.files_created) == 10
        assert config.router_path.is_file()
        assert not config.registration_path.exists()

    @pytest.mark.integration
    def test_file_write_failures_fail_the_run(self, initialised, config):
        with patch("featuregen.scaffolder.generator.write_text", side_effect=OSError("disk full")):
            result = initialised.run("HomeScreen")

        assert result.files_created == []
        assert result.failures == 10
        assert result.routes[config.router_path] is PatchOutcome.INSERTED
        assert result.dependencies is PatchOutcome.INSERTED
        assert not result.success

    @pytest.mark.integration
    def test_failures_counted_per_run(self, initialised):
        with patch("featuregen.scaffolder.generator.write_text", side_effect=OSError("disk full")):
            initialised.run("HomeScreen")

        retry = initialised.run("HomeScreen")

        assert retry.failures == 0
        assert len(retry.files_created) == 10
        assert retry.success

    @pytest.mark.unit
    def test_print_summary(self, initialised):
        initialised.print_summary()


# ---------------------------------------------------------------------------
# GenerationResult
# ---------------------------------------------------------------------------


class TestGenerationResult:
    @pytest.mark.unit
    def test_success_requires_no_failures(self, home, tmp_path):
        ok = GenerationResult(
            identifier=home,
            routes={tmp_path / "r.dart": PatchOutcome.SKIPPED_ANCHOR_MISSING},
            dependencies=PatchOutcome.INSERTED,
        )
        bad = GenerationResult(
            identifier=home,
            routes={tmp_path / "r.dart": PatchOutcome.FAILED},
            dependencies=PatchOutcome.INSERTED,
        )
        assert ok.success
        assert not bad.success

    @pytest.mark.unit
    def test_reported_failures_block_success(self, home):
        result = GenerationResult(identifier=home, dependencies=PatchOutcome.INSERTED, failures=1)
        assert not result.success


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


class TestCli:
    @pytest.mark.unit
    def test_parser(self):
        args = build_parser().parse_args(["ProductScreen", "--list"])
        assert args.module == "ProductScreen"
        assert args.collection is True

    @pytest.mark.unit
    def test_parser_short_flag(self):
        args = build_parser().parse_args(["ProductScreen", "-l"])
        assert args.collection is True

    @pytest.mark.unit
    def test_no_module_is_clean_exit(self, project_root, monkeypatch):
        monkeypatch.chdir(project_root)
        assert main([]) is None
        assert list((project_root / "lib").iterdir()) == []

    @pytest.mark.integration
    def test_main_outside_project_root(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit) as exc_info:
            main(["HomeScreen"])
        assert exc_info.value.code == 1

    @pytest.mark.integration
    def test_main_generates_module(self, project_root, monkeypatch):
        monkeypatch.chdir(project_root)
        init_main([])
        main(["ProductScreen", "--list"])

        source = project_root / "lib/features/product/data/datasources/product_remote_data_source.dart"
        assert "getProductList()" in source.read_text(encoding="utf-8")
        assert "ChangeNotifierProvider<ProductProvider>" in (
            project_root / "lib" / "main.dart"
        ).read_text(encoding="utf-8")

    @pytest.mark.integration
    def test_init_main_outside_project_root(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit):
            init_main([])

    @pytest.mark.integration
    def test_main_reports_file_failures(self, project_root, monkeypatch, capsys):
        monkeypatch.chdir(project_root)
        init_main([])
        capsys.readouterr()

        with patch("featuregen.scaffolder.generator.write_text", side_effect=OSError("disk full")):
            main(["HomeScreen"])

        out = capsys.readouterr().out
        assert "Feature generated with problems" in out
        assert "created successfully" not in out

    @pytest.mark.integration
    def test_init_main_reports_file_failures(self, project_root, monkeypatch, capsys):
        monkeypatch.chdir(project_root)

        with patch("featuregen.scaffolder.generator.write_text", side_effect=OSError("read-only")):
            init_main([])

        out = capsys.readouterr().out
        assert "Project structure created with problems" in out
        assert "created successfully" not in out
