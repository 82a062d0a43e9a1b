#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>
# Spin-torque input parameters and the keyword file parser
#
# pyspintorques Python package
# Authors: Colin Jermain, Minh-Hai Nguyen
# Copyright: 2014-2020
#
#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>

import logging
from enum import Enum

import numpy as np

logger = logging.getLogger(__name__)

COMMENT_MARKERS = ('%', '#', '*', '=', '!')


class SttMode(Enum):
    """ Spin transfer torque treatment

    DISABLED: no spin transfer torque
    ADIABATIC: adiabatic and non-adiabatic (Zhang-Li) gradient torque
    FIXED_LAYER: torque from a current through a fixed ferromagnetic layer
    """
    DISABLED = "N"
    ADIABATIC = "A"
    FIXED_LAYER = "F"

    @classmethod
    def parse(cls, token):
        """ Returns the mode for a one letter code (N, A or F) """
        if isinstance(token, cls):
            return token
        code = str(token).strip()[:1].upper()
        for mode in cls:
            if mode.value == code:
                return mode
        raise ValueError("Unknown STT mode: %r" % (token,))


def parse_flag(token):
    """ Returns True/False for a Y/N flag """
    if isinstance(token, (bool, np.bool_)):
        return bool(token)
    code = str(token).strip()[:1].upper()
    if code == "Y":
        return True
    if code == "N":
        return False
    raise ValueError("Expected Y or N, got %r" % (token,))


def parse_float(token):
    """ Returns a float, also accepting Fortran exponents (1.0d-3) """
    if isinstance(token, str):
        token = token.strip().lower().replace('d', 'e')
    return float(token)


def parse_vector(tokens):
    """ Returns a 3-vector from the first three values in tokens """
    if isinstance(tokens, str):
        tokens = tokens.split()
    values = [parse_float(t) for t in list(tokens)[:3]]
    if len(values) != 3:
        raise ValueError("Expected 3 components, got %d" % len(values))
    return np.array(values, dtype=np.float64)


class SttParameters(object):
    """ Input parameters of the spin-torque calculation

    Creating the object sets the defaults (no STT, no SHE, uniform zero
    current). The following parameters can be provided:
    stt: SttMode or one of 'N', 'A', 'F'
    jsite: read site dependent currents from jvecfile (Y/N or bool)
    jvecfile: name of the site dependent current file
    jvec: uniform spin current vector
    adibeta: adiabaticity parameter (beta)
    do_she: include the spin Hall effect torque (Y/N or bool)
    spin_pol: spin polarization of the current
    she_angle: spin Hall angle
    thick_ferro: thickness of the ferromagnetic layer (in units of alat)
    """

    converters = {
        'stt': SttMode.parse,
        'jsite': parse_flag,
        'do_she': parse_flag,
        'jvecfile': lambda v: str(v).strip(),
        'jvec': parse_vector,
        'adibeta': parse_float,
        'spin_pol': parse_float,
        'she_angle': parse_float,
        'thick_ferro': parse_float,
    }

    def __init__(self, **parameters):
        self.stt = SttMode.DISABLED
        self.jsite = False
        self.do_she = False
        self.jvecfile = 'jvecfile'
        self.jvec = np.zeros(3, dtype=np.float64)
        self.adibeta = 0.0
        self.spin_pol = 0.0
        self.she_angle = 0.0
        self.thick_ferro = 0.0
        self.update(**parameters)


    def update(self, **params):
        """ Update parameters in place

        params: keyword parameters
        """
        for k, v in params.items():
            if k not in self.converters:
                raise TypeError("Unknown spin-torque parameter: %s" % k)
            setattr(self, k, self.converters[k](v))


    def copy(self):
        """ Returns an independent copy of the parameters """
        other = SttParameters()
        other.update(**self.as_dict())
        return other


    def as_dict(self):
        """ Returns the parameters as a plain dict """
        return {k: getattr(self, k) for k in self.converters}


    def __repr__(self):
        items = ", ".join("%s=%r" % kv for kv in self.as_dict().items())
        return "SttParameters(%s)" % items


def is_comment(keyword):
    """ Returns True if the token starts with a comment marker """
    return keyword[:1] in COMMENT_MARKERS


def read_parameters(stream, parameters=None):
    """ Read spin-torque keywords from a text stream

    Each line holds a keyword followed by its value(s). Unknown keywords
    are ignored, malformed values are reported and leave the previous
    value in place. Seekable streams are rewound afterwards so the same
    input file can be scanned by other readers.

    stream: readable text stream
    parameters: SttParameters to update (default: new defaults)
    """
    if parameters is None:
        parameters = SttParameters()

    lines = enumerate(stream, 1)
    for lineno, line in lines:
        tokens = line.split(None, 1)
        if not tokens:
            continue
        keyword = tokens[0].lower()
        if is_comment(keyword):
            continue
        if keyword not in SttParameters.converters:
            logger.debug("Ignoring keyword %s on line %d", keyword, lineno)
            continue

        data = tokens[1].strip() if len(tokens) > 1 else ""
        if keyword == 'jvecfile':
            if not data:
                data = next(lines, (lineno, ""))[1].strip()
        else:
            # Values may continue on the following lines
            data = data.split()
            needed = 3 if keyword == 'jvec' else 1
            while len(data) < needed:
                record = next(lines, None)
                if record is None:
                    break
                data += record[1].split()
            if keyword != 'jvec':
                data = data[0] if data else ""
        try:
            if not data:
                raise ValueError("missing value")
            parameters.update(**{keyword: data})
        except ValueError as e:
            logger.error("Reading %s data on line %d: %s", keyword, lineno, e)

    if getattr(stream, "seekable", lambda: False)():
        stream.seek(0)
    return parameters


def read_parameters_file(filename, parameters=None):
    """ Read spin-torque keywords from a file

    filename: path of the input file
    parameters: SttParameters to update (default: new defaults)
    """
    with open(filename) as f:
        return read_parameters(f, parameters)
