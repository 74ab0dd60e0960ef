from typer.testing import CliRunner

import texcontext
from texcontext.ui.cli import app


def test_get_version_matches_public_api() -> None:
    assert texcontext.get_version() == texcontext.__version__
    assert isinstance(texcontext.__version__, str)


def test_cli_version_command() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0, result.stdout
    assert result.stdout.strip() == texcontext.get_version()
