#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>
# Functions for calculating spin-transfer and spin Hall torque fields
# Core kernels: Use Numpy array operations
#
# pyspintorques Python package
# Authors: Colin Jermain, Minh-Hai Nguyen
# Copyright: 2014-2020
#
#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>

import numpy as np


def stt_prefactor(damping, beta, out):
    """ Fill out with the prefactor of the m x (j.grad)m term
    = -(1 + beta*damping)

    damping: Gilbert damping per atom
    beta: adiabaticity parameter
    out: per atom output array
    """
    out[:] = -(1.0 + beta*damping)
    return out


def zhang_li(emom, dmomdr, damping, beta, btorque, stt_prefac):
    """ Return the adiabatic and non-adiabatic spin transfer torque field
    = (damping - beta)*dm/dr + prefac*(m x dm/dr)

    emom: moment unit vectors (3, natom, mensemble)
    dmomdr: (j.grad)m for every moment (3, natom, mensemble)
    damping: Gilbert damping per atom
    beta: adiabaticity parameter
    btorque: output torque field (3, natom, mensemble)
    stt_prefac: output prefactor per atom
    """
    stt_prefactor(damping, beta, stt_prefac)
    lam = (damping - beta)[np.newaxis, :, np.newaxis]
    prefac = stt_prefac[np.newaxis, :, np.newaxis]
    btorque[...] = lam*dmomdr + prefac*np.cross(emom, dmomdr, axis=0)
    return btorque


def fixed_layer(emom, site_current, btorque):
    """ Return the spin transfer torque field of a current through a fixed
    ferromagnetic layer
    = m x j

    emom: moment unit vectors (3, natom, mensemble)
    site_current: spin current per atom (3, natom)
    btorque: output torque field (3, natom, mensemble)
    """
    j = site_current[:, :, np.newaxis]
    btorque[...] = np.cross(emom, j, axis=0)
    return btorque


def she_factor(she_angle, spin_pol, thick_ferro):
    """ Return the strength of the spin Hall torque
    = she_angle/(spin_pol*thick_ferro)
    """
    if spin_pol*thick_ferro == 0:
        raise ZeroDivisionError("Spin Hall torque needs non-zero spin_pol "
                                "and thick_ferro")
    return she_angle/(spin_pol*thick_ferro)


def spin_hall(emom, mmom, damping, site_current, factor, she_btorque):
    """ Return the spin Hall effect torque field generated by a current
    in a non-magnetic layer with spin-orbit coupling

    emom: moment unit vectors (3, natom, mensemble)
    mmom: moment magnitudes (natom, mensemble)
    damping: Gilbert damping per atom
    site_current: spin current per atom (3, natom)
    factor: spin Hall torque strength (see she_factor)
    she_btorque: output torque field (3, natom, mensemble)
    """
    jx = site_current[0][:, np.newaxis]
    jy = site_current[1][:, np.newaxis]
    lm = damping[:, np.newaxis]*mmom
    she_btorque[0] = -factor*jx*emom[2] - lm*jy
    she_btorque[1] = -factor*jy*emom[2] + lm*jx
    she_btorque[2] = factor*jy*emom[1] + factor*jx*emom[0]
    return she_btorque
