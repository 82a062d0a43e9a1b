import io
import logging

import numpy as np
import pytest

from pyspintorques.parameters import (SttMode, SttParameters, parse_flag,
                                      parse_float, read_parameters,
                                      read_parameters_file)


def test_defaults():
    p = SttParameters()
    assert p.stt is SttMode.DISABLED
    assert p.jsite is False
    assert p.do_she is False
    assert p.jvecfile == 'jvecfile'
    assert np.array_equal(p.jvec, [0, 0, 0])
    assert p.adibeta == 0.0
    assert p.spin_pol == 0.0
    assert p.she_angle == 0.0
    assert p.thick_ferro == 0.0


def test_keyword_overrides():
    p = SttParameters(stt='a', do_she='Y', jvec=[1, 2, 3], adibeta=0.1)
    assert p.stt is SttMode.ADIABATIC
    assert p.do_she is True
    assert np.array_equal(p.jvec, [1.0, 2.0, 3.0])
    assert p.adibeta == 0.1
    with pytest.raises(TypeError):
        p.update(alpha=0.1)


@pytest.mark.parametrize("token, mode", [
    ("N", SttMode.DISABLED),
    ("A", SttMode.ADIABATIC),
    ("f", SttMode.FIXED_LAYER),
    (SttMode.FIXED_LAYER, SttMode.FIXED_LAYER),
])
def test_stt_mode_parse(token, mode):
    assert SttMode.parse(token) is mode


def test_invalid_flags():
    with pytest.raises(ValueError):
        SttMode.parse("X")
    with pytest.raises(ValueError):
        parse_flag("maybe")
    assert parse_flag("yes") is True
    assert parse_flag(False) is False


def test_fortran_exponent():
    assert parse_float("1.5d-3") == pytest.approx(1.5e-3)
    assert parse_float("2.0D0") == 2.0


def test_read_parameters():
    text = """
    STT       A
    jvec      0.0 0.0 1.0
    jsite     N
    jvecfile  currents.dat
    adibeta   0.05
    do_she    Y
    spin_pol  0.5
    She_Angle 0.1
    thick_ferro 4.0d0
    """
    p = read_parameters(io.StringIO(text))
    assert p.stt is SttMode.ADIABATIC
    assert np.array_equal(p.jvec, [0.0, 0.0, 1.0])
    assert p.jsite is False
    assert p.jvecfile == 'currents.dat'
    assert p.adibeta == 0.05
    assert p.do_she is True
    assert p.spin_pol == 0.5
    assert p.she_angle == 0.1
    assert p.thick_ferro == 4.0


def test_comments_and_unknown_keywords_are_skipped():
    text = "\n".join([
        "% stt F",
        "# adibeta 3.0",
        "* spin_pol 2",
        "= she_angle 3",
        "! do_she Y",
        "Natoms 27",
        "posfile ./posfile",
        "adibeta 0.2",
    ])
    p = read_parameters(io.StringIO(text))
    assert p.stt is SttMode.DISABLED
    assert p.adibeta == 0.2
    assert p.spin_pol == 0.0
    assert p.she_angle == 0.0
    assert p.do_she is False


def test_last_occurrence_wins():
    p = read_parameters(io.StringIO("stt A\nstt F\nadibeta 1\nadibeta 2\n"))
    assert p.stt is SttMode.FIXED_LAYER
    assert p.adibeta == 2.0


def test_parse_error_keeps_previous_value(caplog):
    text = "adibeta 0.3\nadibeta abc\njvec 1 2 x\nstt X\nspin_pol\n"
    with caplog.at_level(logging.ERROR, logger="pyspintorques"):
        p = read_parameters(io.StringIO(text))
    assert p.adibeta == 0.3
    assert np.array_equal(p.jvec, [0, 0, 0])
    assert p.stt is SttMode.DISABLED
    assert p.spin_pol == 0.0
    messages = [r.getMessage() for r in caplog.records]
    assert len(messages) == 4
    for keyword in ("adibeta", "jvec", "stt", "spin_pol"):
        assert any(keyword in m for m in messages)


def test_updates_existing_parameters():
    p = SttParameters(adibeta=0.7, stt='F')
    result = read_parameters(io.StringIO("do_she Y\n"), p)
    assert result is p
    assert p.adibeta == 0.7
    assert p.stt is SttMode.FIXED_LAYER
    assert p.do_she is True


def test_stream_is_rewound():
    stream = io.StringIO("stt F\nNatoms 2\n")
    read_parameters(stream)
    assert stream.tell() == 0
    assert stream.readline() == "stt F\n"


def test_read_parameters_file(tmp_path):
    inpsd = tmp_path / "inpsd.dat"
    inpsd.write_text("simid test\nstt F\njvec 1 0 0\n")
    p = read_parameters_file(str(inpsd))
    assert p.stt is SttMode.FIXED_LAYER
    assert np.array_equal(p.jvec, [1.0, 0.0, 0.0])


def test_values_on_following_lines():
    text = "stt\nF\njvec 1.0\n0.0\n  2.0\njvecfile\n  currents.dat\nadibeta\n\n0.1\n"
    p = read_parameters(io.StringIO(text))
    assert p.stt is SttMode.FIXED_LAYER
    assert np.array_equal(p.jvec, [1.0, 0.0, 2.0])
    assert p.jvecfile == 'currents.dat'
    assert p.adibeta == 0.1


def test_copy_is_independent():
    p = SttParameters(stt='A', jvec=[1, 0, 0])
    q = p.copy()
    q.update(stt='F')
    q.jvec[0] = 5.0
    assert p.stt is SttMode.ADIABATIC
    assert np.array_equal(p.jvec, [1.0, 0.0, 0.0])
