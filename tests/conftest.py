"""Shared pytest fixtures for the featuregen test suite.

Provides reusable fixtures for:
- Temporary Flutter project roots (bare, or with a base project)
- Config, TemplateCatalog and Reporter instances bound to that root
- Pre-derived module identifiers
- Sample route-table, constants and main.dart contents
"""

from __future__ import annotations

import io
import textwrap
from pathlib import Path

import pytest
from rich.console import Console

from featuregen.config import Config
from featuregen.naming import ModuleIdentifier, derive_identifier
from featuregen.reporting import Reporter
from featuregen.scaffolder.templates import TemplateCatalog


# ---------------------------------------------------------------------------
# Project roots
# ---------------------------------------------------------------------------

@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary Flutter project root containing only ``pubspec.yaml``."""
    root = tmp_path / "app"
    root.mkdir()
    (root / "pubspec.yaml").write_text("name: app\n", encoding="utf-8")
    (root / "lib").mkdir()
    yield root


@pytest.fixture
def config(project_root: Path) -> Config:
    return Config(project_root=project_root)


@pytest.fixture
def catalog() -> TemplateCatalog:
    return TemplateCatalog()


@pytest.fixture
def reporter(project_root: Path) -> Reporter:
    """Reporter writing to an in-memory console so tests stay quiet."""
    quiet = Console(file=io.StringIO(), width=200)
    return Reporter(console=quiet, root=project_root)


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------

@pytest.fixture
def home() -> ModuleIdentifier:
    return derive_identifier("HomeScreen")


@pytest.fixture
def user_profile() -> ModuleIdentifier:
    return derive_identifier("UserProfileScreen")


# ---------------------------------------------------------------------------
# Sample file contents
# ---------------------------------------------------------------------------

@pytest.fixture
def router_text() -> str:
    """A route table with one existing import block and one route."""
    return textwrap.dedent(
        """\
        import 'package:go_router/go_router.dart';
        import 'package:flutter/material.dart';

        class AppRouter {
          static final GoRouter router = GoRouter(
            routes: [
              GoRoute(
                path: '/',
                builder: (context, state) => const Scaffold(),
              ),
            ],
          );
        }
        """
    )


@pytest.fixture
def constants_text() -> str:
    return textwrap.dedent(
        """\
        class RouteConstants {
          static const String splash = '/';
        }
        """
    )


@pytest.fixture
def main_text() -> str:
    """A ``main.dart`` whose ``MultiProvider`` already has a providers list."""
    return textwrap.dedent(
        """\
        import 'package:flutter/material.dart';
        import 'package:provider/provider.dart';

        import 'app/app.dart';

        void main() {
          runApp(const MyApp());
        }

        class MyApp extends StatelessWidget {
          const MyApp({super.key});

          @override
          Widget build(BuildContext context) {
            return MultiProvider(
              providers: [
                Provider<NetworkInfo>(
                  create: (context) => NetworkInfoImpl(Connectivity()),
                ),
              ],
              child: const App(),
            );
          }
        }
        """
    )


@pytest.fixture
def bare_main_text() -> str:
    """A ``main.dart`` with a bootstrap call but no ``MultiProvider``."""
    return textwrap.dedent(
        """\
        import 'package:flutter/material.dart';
        import 'app/app.dart';

        void main() {
          runApp(const MyApp());
        }
        """
    )
