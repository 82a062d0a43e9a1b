#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>
# Site dependent spin current field
#
# pyspintorques Python package
# Authors: Colin Jermain, Minh-Hai Nguyen
# Copyright: 2014-2020
#
#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>

import logging

import numpy as np

from pyspintorques.errors import SiteCurrentError
from pyspintorques.parameters import is_comment, parse_float

logger = logging.getLogger(__name__)


def _data_lines(f):
    """ Yields (line number, tokens) for every data line of the file """
    for lineno, line in enumerate(f, 1):
        tokens = line.split()
        if tokens and not is_comment(tokens[0]):
            yield lineno, tokens


def uniform_current(natom, jvec):
    """ Returns the current field with jvec on every atom

    natom: number of atoms
    jvec: spin current vector
    """
    jvec = np.asarray(jvec, dtype=np.float64)
    return np.repeat(jvec.reshape(3, 1), natom, axis=1)


def load_current(natom, filename):
    """ Returns the current field read from a site dependent current file

    Each data line holds 'isite jx jy jz' with 1-based atom indices.
    A file with a different number of lines than atoms is accepted with a
    warning, atoms missing from the file get zero current. Indices outside
    1..natom are rejected.

    natom: number of atoms
    filename: site dependent current file
    """
    sitenatomjvec = np.zeros((3, natom), dtype=np.float64)
    seen = np.zeros(natom, dtype=bool)

    with open(filename) as f:
        # Pre-read file to get number of lines
        flines = sum(1 for _ in _data_lines(f))
        f.seek(0)

        logger.info("Reading site dependent currents from %s", filename)
        if flines != natom:
            logger.warning("Size of %s is %d lines, not the number of atoms %d",
                           filename, flines, natom)

        for lineno, tokens in _data_lines(f):
            if len(tokens) < 4:
                raise SiteCurrentError(filename, lineno,
                                       "expected 'isite jx jy jz'")
            try:
                isite = int(tokens[0])
                jx, jy, jz = [parse_float(t) for t in tokens[1:4]]
            except ValueError as e:
                raise SiteCurrentError(filename, lineno, str(e))
            if not 1 <= isite <= natom:
                raise SiteCurrentError(filename, lineno,
                        "site %d outside 1..%d" % (isite, natom))
            sitenatomjvec[:, isite-1] = (jx, jy, jz)
            seen[isite-1] = True

    missing = natom - np.count_nonzero(seen)
    if missing:
        logger.warning("%d atoms have no current in %s, set to zero",
                       missing, filename)
    return sitenatomjvec


def read_jvecfile(natom, parameters):
    """ Returns the (3, natom) spin current field for the parameters

    If jsite is set, the field is read from the jvecfile, otherwise jvec
    is used for every atom. The returned array is read-only.

    natom: number of atoms
    parameters: SttParameters
    """
    if parameters.jsite:
        sitenatomjvec = load_current(natom, parameters.jvecfile)
    else:
        sitenatomjvec = uniform_current(natom, parameters.jvec)
    sitenatomjvec.flags.writeable = False
    return sitenatomjvec
