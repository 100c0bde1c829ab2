from PIL import Image

from asciiraster.cli import main


def test_text_mode(tmp_path):
    src = tmp_path / "in.png"
    out = tmp_path / "out.txt"
    Image.new("L", (4, 4), 255).save(src)
    assert main([str(src), str(out), "-t", "#. "]) == 0
    assert out.read_bytes() == b"\r\n".join([b" " * 8] * 4)


def test_scale_option(tmp_path):
    src = tmp_path / "in.png"
    out = tmp_path / "out.txt"
    Image.new("L", (40, 20), 0).save(src)
    assert main([str(src), str(out), "-s", "10:_", "--filter", "nearest"]) == 0
    assert out.read_text(encoding="utf-8").split("\r\n") == ["@" * 20] * 5


def test_missing_input_exits_cleanly(tmp_path, capsys):
    assert main([str(tmp_path / "missing.png"), str(tmp_path / "out.txt")]) == 0
    assert "Can not find input image!" in capsys.readouterr().out
    assert not (tmp_path / "out.txt").exists()


def test_missing_font_exits_cleanly(tmp_path, capsys):
    src = tmp_path / "in.png"
    Image.new("L", (2, 2), 0).save(src)
    code = main([str(src), str(tmp_path / "out.png"), "-r", "--font", str(tmp_path / "missing.ttf")])
    assert code == 0
    assert "Can not find font file!" in capsys.readouterr().out


def test_malformed_scale_fails(tmp_path, capsys):
    src = tmp_path / "in.png"
    Image.new("L", (2, 2), 0).save(src)
    assert main([str(src), str(tmp_path / "out.txt"), "-s", "1:2:3"]) == 1
    assert "Invalid scale value" in capsys.readouterr().err


def test_empty_table_fails(tmp_path, capsys):
    src = tmp_path / "in.png"
    Image.new("L", (2, 2), 0).save(src)
    assert main([str(src), str(tmp_path / "out.txt"), "-t", ""]) == 1
    assert "at least one character" in capsys.readouterr().err


def test_undecodable_input_fails(tmp_path, capsys):
    src = tmp_path / "in.png"
    src.write_bytes(b"not an image")
    assert main([str(src), str(tmp_path / "out.txt")]) == 1
    assert "error:" in capsys.readouterr().err


def test_zero_scale_writes_empty_text(tmp_path):
    src = tmp_path / "in.png"
    out = tmp_path / "out.txt"
    Image.new("L", (4, 4), 0).save(src)
    assert main([str(src), str(out), "-s", "0"]) == 0
    assert out.read_bytes() == b""


def test_raster_to_unknown_format_fails(tmp_path, capsys, monkeypatch, fake_font):
    monkeypatch.setattr("asciiraster.converter.load_font", lambda path: fake_font)
    src = tmp_path / "in.png"
    Image.new("L", (2, 2), 0).save(src)
    assert main([str(src), str(tmp_path / "out.txt"), "-r", "--font-size", "8"]) == 1
    assert "error: failed to process" in capsys.readouterr().err
