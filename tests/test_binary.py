import pytest

from dashsave.binary import FLOAT32_LOWEST, RecordReader, RecordWriter, as_float32
from dashsave.errors import MalformedRecord, SaveValidationError


def test_int32_is_little_endian():
    w = RecordWriter()
    w.write_int32(12)
    w.write_int32(-1)
    assert w.getvalue() == b"\x0c\x00\x00\x00\xff\xff\xff\xff"


def test_int32_range_enforced():
    w = RecordWriter()
    with pytest.raises(SaveValidationError):
        w.write_int32(2 ** 31)
    with pytest.raises(SaveValidationError):
        w.write_int32(True)


def test_string_uses_variable_length_prefix():
    w = RecordWriter()
    w.write_string("Day")
    w.write_string("x" * 200)
    data = w.getvalue()
    assert data[:4] == b"\x03Day"
    # 200 needs two 7-bit groups
    assert data[4:6] == b"\xc8\x01"

    r = RecordReader(data)
    assert r.read_string() == "Day"
    assert r.read_string() == "x" * 200
    assert r.remaining == 0


def test_unicode_string_length_counts_bytes():
    w = RecordWriter()
    w.write_string("Mr. Dräc")
    data = w.getvalue()
    assert data[0] == len("Mr. Dräc".encode("utf-8"))
    assert RecordReader(data).read_string() == "Mr. Dräc"


def test_bool_reads_any_nonzero_as_true():
    r = RecordReader(b"\x00\x01\x07")
    assert r.read_bool() is False
    assert r.read_bool() is True
    assert r.read_bool() is True


def test_truncated_reads_raise():
    with pytest.raises(MalformedRecord):
        RecordReader(b"\x01\x00").read_int32()
    with pytest.raises(MalformedRecord):
        RecordReader(b"\x05ab").read_string()
    with pytest.raises(MalformedRecord):
        RecordReader(b"").read_bool()


def test_bad_string_prefix_and_payload():
    with pytest.raises(MalformedRecord):
        RecordReader(b"\x80\x80\x80\x80\x80\x01").read_string()
    with pytest.raises(MalformedRecord):
        RecordReader(b"\x01\xff").read_string()


def test_negative_count_is_malformed():
    w = RecordWriter()
    w.write_int32(-3)
    with pytest.raises(MalformedRecord):
        RecordReader(w.getvalue()).read_count("theme")


def test_float32_quantization():
    assert as_float32(0.5) == 0.5
    assert as_float32(0.1) != 0.1
    assert as_float32(FLOAT32_LOWEST) == FLOAT32_LOWEST
    with pytest.raises(SaveValidationError):
        as_float32(1e300)
