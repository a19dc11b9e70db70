import importlib.util
from pathlib import Path


def _load_guard():
    script = (
        Path(__file__).resolve().parent.parent / "scripts" / "check_core_imports.py"
    )
    spec = importlib.util.spec_from_file_location("check_core_imports", script)
    module = importlib.util.module_from_spec(spec)
    assert spec.loader is not None  # for mypy
    spec.loader.exec_module(module)
    return module


def test_core_import_guard_passes():
    exit_code = _load_guard().main()
    assert exit_code == 0, "core import guard failed"


def test_core_import_guard_flags_server_imports(tmp_path, monkeypatch):
    guard = _load_guard()
    pkg = tmp_path / "sanity_mcp"
    core = pkg / "core"
    core.mkdir(parents=True)
    bad = core / "leaky.py"
    bad.write_text("from ..server import build_app\nimport mcp.server.fastmcp\n")
    monkeypatch.setattr(guard, "PACKAGE_DIR", pkg)

    errors = guard.scan_file(bad)

    assert len(errors) == 2
    assert "sanity_mcp.server" in errors[0]
    assert "mcp.server.fastmcp" in errors[1]
