#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>
# Current density diagnostics
#
# pyspintorques Python package
# Authors: Colin Jermain, Minh-Hai Nguyen
# Copyright: 2014-2020
#
#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>

import logging
from collections import namedtuple

import numpy as np

from pyspintorques import constants

logger = logging.getLogger(__name__)

CurrentDensity = namedtuple('CurrentDensity',
                            ['curr_den', 'alat', 'spin_pol', 'cell_vol'])


def cell_volume(C1, C2, C3, alat):
    """ Returns the volume of the cell in m^3

    C1, C2, C3: lattice vectors (in units of alat)
    alat: lattice constant (m)
    """
    C1, C2, C3 = (np.asarray(c, dtype=np.float64) for c in (C1, C2, C3))
    return np.dot(C1, np.cross(C2, C3))*alat**3


def total_moment(ammom_inp):
    """ Returns the total moment of the cell

    ammom_inp: moment magnitudes per site of the cell, either (NA,) or
               (NA, Nchmax, conf_num) of which the first chemical
               component and configuration are summed
    """
    ammom_inp = np.asarray(ammom_inp, dtype=np.float64)
    if ammom_inp.ndim == 1:
        return ammom_inp.sum()
    return ammom_inp[:, 0, 0].sum()


def current_density(C1, C2, C3, alat, spin_pol, total_mom, jvec,
                    ev=constants.ev, gama=constants.gama):
    """ Returns the current density (A/m^2) corresponding to the spin current
    vector, together with the lattice constant and spin polarization used

    A lattice constant of None or 1 is taken as not given and the BCC Fe
    lattice constant is used. A spin polarization of None or 0 is taken as
    not given and full polarization is used.

    C1, C2, C3: lattice vectors (in units of alat)
    alat: lattice constant (m)
    spin_pol: spin polarization of the current
    total_mom: total moment of the cell (see total_moment)
    jvec: spin current vector
    ev: electron charge
    gama: gyromagnetic ratio
    """
    if alat is None or alat == 1.0:
        alat = constants.alat_bcc_fe
        logger.info("No lattice constant given, assuming BCC Fe lattice "
                    "constant: %g m", alat)
    cell_vol = cell_volume(C1, C2, C3, alat)

    if spin_pol is None or spin_pol == 0:
        spin_pol = 1.0
        logger.info("No polarization set, assuming 100%%: %g", spin_pol)

    jvec = np.asarray(jvec, dtype=np.float64)
    curr_den = ev*total_mom*gama*alat*jvec/(cell_vol*spin_pol)
    logger.info("Current density vector: %g %g %g A/m^2", *curr_den)
    return CurrentDensity(curr_den, alat, spin_pol, cell_vol)
