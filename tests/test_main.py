"""End-to-end tests for the command line front end."""

from __future__ import annotations

import pandas as pd

from svgtheme.main import main


def test_scan_prints_summary(icon_tree, capsys):
    rc = main(["scan", str(icon_tree)])
    out = capsys.readouterr().out

    assert rc == 0
    assert "SVG files: 3" in out
    assert "Other files: 2" in out
    assert "firefox.svg" in out
    # palette from the previews: #112233, #aabbcc (firefox and terminal)
    assert "#112233 #aabbcc" in out


def test_scan_error_exit_code(tmp_path, capsys):
    rc = main(["scan", str(tmp_path / "missing")])
    err = capsys.readouterr().err

    assert rc == 1
    assert err.startswith("Error:")


def test_export_with_cli_mappings_and_manifest(icon_tree, install_root, tmp_path, capsys):
    manifest = tmp_path / "manifest.csv"
    rc = main([
        "export", str(icon_tree),
        "--theme", "Cli",
        "--map", "#aabbcc=#010203",
        "--install-root", str(install_root),
        "--manifest", str(manifest),
    ])
    out = capsys.readouterr().out

    assert rc == 0
    assert "SVG files recolored: 3" in out
    assert "Other files copied: 2" in out
    assert 'fill="#010203"' in (install_root / "Cli" / "apps" / "firefox.svg").read_text(encoding="utf-8")

    df = pd.read_csv(manifest)
    assert list(df.columns) == ["src_path", "dst_path", "action"]
    assert sorted(df["action"].unique()) == ["copied", "directory", "rewritten"]
    assert (df["action"] == "rewritten").sum() == 3


def test_export_uses_config_and_mappings_file(icon_tree, install_root, tmp_path, capsys):
    mappings = tmp_path / "mappings.yaml"
    mappings.write_text('"#112233": "#ffffff"\n', encoding="utf-8")
    settings = tmp_path / "settings.yaml"
    settings.write_text(
        f"source_dir: {icon_tree}\n"
        "theme_name: FromConfig\n"
        f"install_root: {install_root}\n"
        f"mappings_file: {mappings}\n"
        'color_mappings:\n  - ["#aabbcc", "#112233"]\n',
        encoding="utf-8",
    )

    rc = main(["--config", str(settings), "export"])
    capsys.readouterr()

    assert rc == 0
    out = install_root / "FromConfig"
    # inline mapping runs first, then the file mapping sees its output
    assert 'fill="#ffffff"' in (out / "apps" / "firefox.svg").read_text(encoding="utf-8")
    assert 'fill="#ffffff"' in (out / "places" / "folder.svg").read_text(encoding="utf-8")
    assert 'fill="#fff"' in (out / "apps" / "terminal.SVG").read_text(encoding="utf-8")


def test_export_requires_theme_name(icon_tree, capsys):
    rc = main(["export", str(icon_tree)])
    assert rc == 1
    assert "theme_name is required" in capsys.readouterr().err


def test_export_existing_theme_fails(icon_tree, install_root, capsys):
    args = ["export", str(icon_tree), "--theme", "Dup", "--install-root", str(install_root)]
    assert main(args) == 0
    assert main(args) == 1
    assert "already exists" in capsys.readouterr().err


def test_bad_mapping_argument(icon_tree, install_root, capsys):
    rc = main([
        "export", str(icon_tree), "--theme", "Bad",
        "--map", "red=blue", "--install-root", str(install_root),
    ])
    assert rc == 1
    assert "invalid hex color" in capsys.readouterr().err
    assert not (install_root / "Bad").exists()


def test_malformed_settings_yaml(tmp_path, capsys):
    settings = tmp_path / "settings.yaml"
    settings.write_text("theme_name: [unclosed\n", encoding="utf-8")

    rc = main(["--config", str(settings), "scan", str(tmp_path)])

    assert rc == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_unwritable_manifest(icon_tree, install_root, tmp_path, capsys):
    rc = main([
        "export", str(icon_tree), "--theme", "NoManifest",
        "--install-root", str(install_root), "--manifest", str(tmp_path),
    ])

    assert rc == 1
    assert capsys.readouterr().err.startswith("Error:")
