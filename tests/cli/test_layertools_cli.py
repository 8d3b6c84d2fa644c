from __future__ import annotations

import json
import zipfile
from pathlib import Path

import pytest

from helpers import build_jar, corrupt_stored_bytes, layered_members
from layertools.cli._dispatcher import build_parser, main as cli_main
from layertools.cli._utils import parse_layer_selection


def _files_under(root: Path) -> list[str]:
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())


def test_list_prints_layer_names_in_index_order(layered_jar: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_main([str(layered_jar), "list"])
    captured = capsys.readouterr()

    assert code == 0
    assert captured.out.splitlines() == [
        "dependencies",
        "spring-boot-loader",
        "snapshot-dependencies",
        "application",
    ]
    assert captured.err == ""


def test_list_json(layered_jar: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_main([str(layered_jar), "list", "--json"])
    assert code == 0
    assert json.loads(capsys.readouterr().out) == {
        "layers": ["dependencies", "spring-boot-loader", "snapshot-dependencies", "application"]
    }


def test_classpath_prints_entries_in_order(layered_jar: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_main([str(layered_jar), "classpath"])
    captured = capsys.readouterr()

    assert code == 0
    assert captured.out == "BOOT-INF/lib/a.jar\nBOOT-INF/lib/b.jar\n"


def test_extract_all_layers(layered_jar: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "out"
    code = cli_main([str(layered_jar), "extract", "--destination", str(out)])
    captured = capsys.readouterr()

    assert code == 0
    assert captured.out == ""
    assert sorted(p.name for p in out.iterdir()) == [
        "application",
        "dependencies",
        "snapshot-dependencies",
        "spring-boot-loader",
    ]
    assert _files_under(out / "dependencies") == ["BOOT-INF/lib/a.jar", "BOOT-INF/lib/b.jar"]
    assert _files_under(out / "spring-boot-loader") == ["org/springframework/boot/loader/JarLauncher.class"]
    assert _files_under(out / "snapshot-dependencies") == []
    assert _files_under(out / "application") == [
        "BOOT-INF/classes/application.properties",
        "BOOT-INF/classes/com/example/App.class",
        "BOOT-INF/classpath.idx",
        "BOOT-INF/layers.idx",
        "META-INF/MANIFEST.MF",
    ]
    assert (out / "dependencies" / "BOOT-INF" / "lib" / "a.jar").read_bytes() == b"PK a"


def test_extract_selected_layers(layered_jar: Path, tmp_path: Path) -> None:
    out = tmp_path / "out"
    code = cli_main([str(layered_jar), "extract", "--destination", str(out), "--layers", "dependencies,application"])

    assert code == 0
    assert sorted(p.name for p in out.iterdir()) == ["application", "dependencies"]


def test_extract_layer_alias_is_repeatable(layered_jar: Path, tmp_path: Path) -> None:
    out = tmp_path / "out"
    code = cli_main(
        [str(layered_jar), "extract", "--destination", str(out), "--layer", "spring-boot-loader", "--layer", "dependencies"]
    )

    assert code == 0
    assert sorted(p.name for p in out.iterdir()) == ["dependencies", "spring-boot-loader"]


def test_extract_defaults_to_configured_destination(
    layered_jar: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("LAYERTOOLS_extract__destination", str(tmp_path / "from-env"))
    assert cli_main([str(layered_jar), "extract", "--layers", "dependencies"]) == 0
    assert (tmp_path / "from-env" / "dependencies" / "BOOT-INF" / "lib" / "b.jar").exists()


def test_extract_json_summary(layered_jar: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "out"
    code = cli_main([str(layered_jar), "extract", "--destination", str(out), "--layers", "dependencies", "--json"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "success"
    assert payload["layers"] == [{"name": "dependencies", "path": str(out / "dependencies"), "files": 2}]


def test_missing_manifest_property_fails(jar_factory, capsys: pytest.CaptureFixture[str]) -> None:
    members = layered_members()
    members["META-INF/MANIFEST.MF"] = "Manifest-Version: 1.0\nSpring-Boot-Layers-Index: BOOT-INF/layers.idx\n"
    jar = jar_factory(members)

    code = cli_main([str(jar), "list"])
    captured = capsys.readouterr()

    assert code == 1
    assert captured.out == ""
    assert "Spring-Boot-Classpath-Index" in captured.err


def test_unknown_layer_file_fails(jar_factory, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    layers = '- "first":\n  - "BOOT-INF/lib/"\n- "broken":\n  - "missing.txt"\n- "last":\n  - "org/"\n'
    jar = jar_factory(layered_members(layers_yaml=layers))
    out = tmp_path / "out"

    code = cli_main([str(jar), "extract", "--destination", str(out)])
    captured = capsys.readouterr()

    assert code == 1
    assert "Error: unknown file missing.txt in layer broken" in captured.err
    assert (out / "first" / "BOOT-INF" / "lib" / "a.jar").exists()
    assert not (out / "last").exists()


def test_traversal_layer_name_fails(jar_factory, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    jar = jar_factory(layered_members(layers_yaml='- "../escape":\n  - "BOOT-INF/lib/"\n'))
    out = tmp_path / "out"

    code = cli_main([str(jar), "extract", "--destination", str(out)])

    assert code == 1
    assert "potential malicious use of relative path" in capsys.readouterr().err
    assert not (tmp_path / "escape").exists()
    assert list(out.iterdir()) == []


def test_error_json_payload(jar_factory, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    jar = jar_factory(layered_members(layers_yaml='- "app":\n  - "nope.txt"\n'))

    code = cli_main([str(jar), "extract", "--destination", str(tmp_path / "out"), "--json"])
    payload = json.loads(capsys.readouterr().err)

    assert code == 1
    assert payload["error"] == "extract_error"
    assert payload["code"] == "UnknownLayerFileError"
    assert payload["context"] == {"layer": "app", "entry": "nope.txt"}


def test_malformed_layer_index_fails(jar_factory, capsys: pytest.CaptureFixture[str]) -> None:
    jar = jar_factory(layered_members(layers_yaml="dependencies: [a]\n"))

    assert cli_main([str(jar), "list"]) == 1
    assert "expected array of layer mappings" in capsys.readouterr().err


def test_missing_jar_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main([str(tmp_path / "missing.jar"), "list"]) == 1
    assert "Failed to open jar" in capsys.readouterr().err


def test_subcommand_is_required(layered_jar: Path) -> None:
    assert cli_main([str(layered_jar)]) == 2


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    from layertools import __version__

    assert cli_main(["--version"]) == 0
    assert __version__ in capsys.readouterr().out


def test_parser_registers_all_commands() -> None:
    parser = build_parser()
    args = parser.parse_args(["app.jar", "extract", "--layers", "a,b", "--layer", "c"])
    assert args.command == "extract"
    assert args.jar == Path("app.jar")
    assert parse_layer_selection(args.layers) == {"a", "b", "c"}


def test_parse_layer_selection_ignores_blanks() -> None:
    assert parse_layer_selection(["a,,b", " c ", ""]) == {"a", "b", "c"}
    assert parse_layer_selection(None) == frozenset()


def test_real_jar_with_directory_entries(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    jar = build_jar(
        tmp_path / "tiny.jar",
        {
            "META-INF/MANIFEST.MF": "Spring-Boot-Layers-Index: idx/layers.idx\nSpring-Boot-Classpath-Index: idx/cp.idx\n",
            "idx/layers.idx": '- "only":\n  - "a/"\n',
            "idx/cp.idx": "[]\n",
            "a/": None,
            "a/x.txt": "x",
            "a/b/y.txt": "y",
            "ab/x": "not me",
            "c.txt": "c",
        },
    )
    out = tmp_path / "out"

    assert cli_main([str(jar), "extract", "--destination", str(out)]) == 0
    assert _files_under(out) == ["only/a/b/y.txt", "only/a/x.txt"]

    assert cli_main([str(jar), "classpath"]) == 0
    assert capsys.readouterr().out == ""


def test_corrupt_member_json_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    payload = b"damaged dependency payload"
    members = layered_members(extra={"BOOT-INF/lib/a.jar": payload})
    jar = build_jar(tmp_path / "app.jar", members, compression=zipfile.ZIP_STORED)
    corrupt_stored_bytes(jar, payload)
    out = tmp_path / "out"

    code = cli_main([str(jar), "extract", "--destination", str(out), "--json"])
    payload_json = json.loads(capsys.readouterr().err)

    assert code == 1
    assert payload_json["error"] == "extract_error"
    assert payload_json["code"] == "ExtractionIOError"
    assert payload_json["context"]["path"] == str(out / "dependencies" / "BOOT-INF" / "lib" / "a.jar")
