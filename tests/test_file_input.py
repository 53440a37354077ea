import pytest

from deepfolio.exceptions import FileTypeError
from deepfolio.file_input import is_text_file, read_text_file


def test_reads_txt(tmp_path):
    p = tmp_path / "resume.txt"
    p.write_text("hello\nworld", encoding="utf-8")
    assert is_text_file(p)
    assert read_text_file(p) == "hello\nworld"


@pytest.mark.parametrize("name", ["resume.pdf", "resume.docx", "photo.png", "resume"])
def test_rejects_non_text(tmp_path, name):
    p = tmp_path / name
    p.write_bytes(b"\x00\x01binary")
    with pytest.raises(FileTypeError, match="Please upload a valid .txt file."):
        read_text_file(p)


def test_rejects_before_reading(tmp_path):
    # the file does not even need to exist to be refused
    with pytest.raises(FileTypeError):
        read_text_file(tmp_path / "missing.pdf")
