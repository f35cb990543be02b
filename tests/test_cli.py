import json

from bootmeta.cli.main import BootMetaCLI


def test_manifest_goes_to_stdout(boot_root, capsys, fake_file_type):
    status = BootMetaCLI().run(["--auto-detect", str(boot_root)])
    out, err = capsys.readouterr()

    assert status == 0
    manifest = json.loads(out)
    assert set(manifest["kernels"]) == {"vmlinuz-a", "vmlinuz-b"}
    assert manifest["bootloader"]["entries"]["arch.conf"]["options"]["tre-invite"] == "$TRE_INVITE"
    assert out.startswith('{\n  "kernels"')


def test_summary_is_written_to_stderr(boot_root, capsys, fake_file_type):
    status = BootMetaCLI().run(["--auto-detect", str(boot_root), "--summary"])
    out, err = capsys.readouterr()

    assert status == 0
    json.loads(out)
    assert "BootMeta Manifest Summary" in err
    assert "Entries: 2" in err
    assert "arch.conf" in err


def test_failure_prints_message_and_no_json(tmp_path, capsys, fake_file_type):
    status = BootMetaCLI().run(["--kernel", str(tmp_path / "missing-kernel")])
    out, err = capsys.readouterr()

    assert status == 1
    assert out == ""
    assert "missing-kernel" in err
    assert "Traceback" not in err


def test_auto_detect_failure(tmp_path, capsys, fake_file_type):
    status = BootMetaCLI().run(["--auto-detect", str(tmp_path)])
    out, err = capsys.readouterr()

    assert status == 1
    assert out == ""
    assert "Failed to auto-detect boot entries" in err


def test_build_file_and_flags_combine(tmp_path, capsys, fake_file_type):
    (tmp_path / "vmlinuz").write_bytes(b"kernel")
    (tmp_path / "initrd.img").write_bytes(b"initrd")
    build = tmp_path / "build.yaml"
    build.write_text("kernels: [vmlinuz]\n")

    status = BootMetaCLI().run([
        "--config", str(build),
        "--initcpio", str(tmp_path / "initrd.img"),
    ])
    out, _ = capsys.readouterr()

    assert status == 0
    manifest = json.loads(out)
    assert list(manifest["kernels"]) == ["vmlinuz"]
    assert list(manifest["initcpios"]) == ["initrd.img"]
    assert manifest["shrinkwrap"] is None
