"""Integration tests for the convert / translate / outline commands"""

from typer.testing import CliRunner

from outbreak.cli.cli import app


NOTE = "---\ntags: [demo]\n---\n\n# Title\n\nintro\n\n- [ ] #task write 📅 2024-01-01\n"


def _invoke(*args: str):
    return CliRunner().invoke(app, list(args))


def test_convert_writes_logseq_page(tmp_path):
    """convert writes the outlined page, creating parent directories."""
    (tmp_path / "note.md").write_text(NOTE, encoding="utf-8")
    result = _invoke("convert", "note.md", "pages/note.md")

    assert result.exit_code == 0, result.output
    assert "note.md -> pages" in result.output
    assert (tmp_path / "pages" / "note.md").read_text(encoding="utf-8") == (
        "tags:: demo\n"
        "\n"
        "- # Title\n"
        "  - intro\n"
        "    - TODO write\n"
        "      DEADLINE: <2024-01-01 Mon>"
    )


def test_convert_options_override_config(tmp_path):
    """--list-nesting, --no-dates and --filter-tag beat config.yaml."""
    (tmp_path / "config.yaml").write_text("list_nesting: separate\n", encoding="utf-8")
    (tmp_path / "note.md").write_text(NOTE, encoding="utf-8")
    result = _invoke(
        "convert", "note.md", "out.md",
        "--list-nesting", "none", "--no-dates", "--filter-tag", "",
    )

    assert result.exit_code == 0, result.output
    assert (tmp_path / "out.md").read_text(encoding="utf-8").endswith(
        "- # Title\n  - intro\n  - TODO #task write 📅 2024-01-01"
    )


def test_convert_uses_config_yaml(tmp_path):
    """Settings from config.yaml apply when no option is given."""
    (tmp_path / "config.yaml").write_text("list_nesting: separate\n", encoding="utf-8")
    (tmp_path / "note.md").write_text(NOTE, encoding="utf-8")
    result = _invoke("convert", "note.md", "out.md")

    assert result.exit_code == 0, result.output
    assert "  - intro\n  -\n    - TODO write" in (tmp_path / "out.md").read_text(encoding="utf-8")


def test_translate_command(tmp_path):
    """translate applies rules without outlining."""
    (tmp_path / "note.md").write_text("Some ==marked== text\n", encoding="utf-8")
    result = _invoke("translate", "note.md", "out.md")

    assert result.exit_code == 0, result.output
    assert (tmp_path / "out.md").read_text(encoding="utf-8") == "Some ^^marked^^ text\n"


def test_outline_command(tmp_path):
    """outline nests content without touching Obsidian syntax."""
    (tmp_path / "note.md").write_text("# h\n\n==x==", encoding="utf-8")
    result = _invoke("outline", "note.md", "out.md")

    assert result.exit_code == 0, result.output
    assert (tmp_path / "out.md").read_text(encoding="utf-8") == "- # h\n  - ==x=="


def test_missing_input_fails(tmp_path):
    """An unreadable input exits 1 with an error message."""
    result = _invoke("convert", "missing.md", "out.md")

    assert result.exit_code == 1
    assert "Cannot read missing.md" in result.output
    assert not (tmp_path / "out.md").exists()


def test_conversion_error_fails(tmp_path):
    """A conversion error exits 1 and writes nothing."""
    (tmp_path / "bad.md").write_text("---\nkey: [unclosed\n---\nBody", encoding="utf-8")
    result = _invoke("convert", "bad.md", "out.md")

    assert result.exit_code == 1
    assert "Failed to convert bad.md" in result.output
    assert not (tmp_path / "out.md").exists()


def test_invalid_config_fails(tmp_path):
    """A malformed config.yaml is reported instead of raising."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n", encoding="utf-8")
    (tmp_path / "note.md").write_text("text", encoding="utf-8")
    result = _invoke("convert", "note.md", "out.md")

    assert result.exit_code == 1
    assert "Invalid config.yaml" in result.output


def test_verbose_flag(tmp_path):
    """--verbose is accepted before the command."""
    (tmp_path / "note.md").write_text("text", encoding="utf-8")
    result = _invoke("--verbose", "outline", "note.md", "out.md")

    assert result.exit_code == 0, result.output
