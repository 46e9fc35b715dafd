import io
import json
import zipfile

from subtitle_payload.cli import main

SRT = "1\n00:00:01,000 --> 00:00:03,000\nline1\n"


def make_zip(files):
    bio = io.BytesIO()
    with zipfile.ZipFile(bio, mode="w") as z:
        for name, content in files.items():
            z.writestr(name, content)
    return bio.getvalue()


def test_archive_to_output_file(tmp_path):
    source = tmp_path / "download.zip"
    source.write_bytes(make_zip({"movie.srt": SRT}))
    target = tmp_path / "out.srt"
    assert main([str(source), "--output", str(target)]) == 0
    assert target.read_text(encoding="utf-8") == SRT


def test_subtitle_file_is_decoded_directly(tmp_path):
    source = tmp_path / "movie.sub"
    source.write_bytes(b"{0}{25}Hello")
    target = tmp_path / "out.srt"
    assert main([str(source), "-o", str(target), "--fps", "25"]) == 0
    assert "00:00:00,000 --> 00:00:01,000\nHello" in target.read_text(encoding="utf-8")


def test_garbage_exits_with_error(tmp_path, capsys):
    source = tmp_path / "download.bin"
    source.write_bytes(b"not an archive")
    assert main([str(source)]) == 1
    assert "error:" in capsys.readouterr().err


def test_json_output(tmp_path, capsys):
    source = tmp_path / "download.zip"
    source.write_bytes(make_zip({"movie.srt": SRT}))
    assert main([str(source), "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["success"] is True
    assert payload["filename"] == "movie.srt"
    assert payload["encoding"] == "utf-8"
