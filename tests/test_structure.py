"""Test that the package layout is correct."""


def test_directories_exist(project_root):
    """Test that all expected directories exist."""
    assert (project_root / "core").exists()
    assert (project_root / "models").exists()
    assert (project_root / "commands").exists()
    assert (project_root / "commands" / "dashboard").exists()
    assert (project_root / "tests").exists()


def test_init_files_exist(project_root):
    """Test that all __init__.py files exist."""
    assert (project_root / "core" / "__init__.py").exists()
    assert (project_root / "models" / "__init__.py").exists()
    assert (project_root / "commands" / "__init__.py").exists()
    assert (project_root / "commands" / "dashboard" / "__init__.py").exists()


def test_main_script_exists(project_root):
    """Test that main entry point exists."""
    assert (project_root / "hue_dashboard.py").exists()


def test_all_commands_registered():
    """Every command in the quick reference is registered on the CLI group."""
    from hue_dashboard import cli
    from commands.setup import COMMAND_SECTIONS

    for section in COMMAND_SECTIONS:
        for usage, _ in section.commands:
            assert usage.split()[0] in cli.commands
