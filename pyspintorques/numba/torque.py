#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>
# Functions for calculating spin-transfer and spin Hall torque fields
# Numba kernels: parallel loops over atoms
#
# pyspintorques Python package
# Authors: Colin Jermain, Minh-Hai Nguyen
# Copyright: 2014-2020
#
#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>

import numba as nb

from pyspintorques.core.torque import she_factor


@nb.njit(parallel=True, cache=True)
def stt_prefactor(damping, beta, out):
    """ Fill out with the prefactor of the m x (j.grad)m term
    = -(1 + beta*damping)

    damping: Gilbert damping per atom
    beta: adiabaticity parameter
    out: per atom output array
    """
    for i in nb.prange(damping.shape[0]):
        out[i] = -(1.0 + beta*damping[i])
    return out


@nb.njit(parallel=True, cache=True)
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
    natom = emom.shape[1]
    mensemble = emom.shape[2]
    for i in nb.prange(natom):
        lam = damping[i] - beta
        # Same for every ensemble
        prefac = -(1.0 + beta*damping[i])
        stt_prefac[i] = prefac
        for k in range(mensemble):
            btorque[0, i, k] = lam*dmomdr[0, i, k]
            btorque[1, i, k] = lam*dmomdr[1, i, k]
            btorque[2, i, k] = lam*dmomdr[2, i, k]
            btorque[0, i, k] += prefac*(emom[1, i, k]*dmomdr[2, i, k]
                                        - emom[2, i, k]*dmomdr[1, i, k])
            btorque[1, i, k] += prefac*(emom[2, i, k]*dmomdr[0, i, k]
                                        - emom[0, i, k]*dmomdr[2, i, k])
            btorque[2, i, k] += prefac*(emom[0, i, k]*dmomdr[1, i, k]
                                        - emom[1, i, k]*dmomdr[0, i, k])
    return btorque


@nb.njit(parallel=True, cache=True)
def fixed_layer(emom, site_current, btorque):
    """ Return the spin transfer torque field of a current through a fixed
    ferromagnetic layer
    = m x j

    emom: moment unit vectors (3, natom, mensemble)
    site_current: spin current per atom (3, natom)
    btorque: output torque field (3, natom, mensemble)
    """
    natom = emom.shape[1]
    mensemble = emom.shape[2]
    for i in nb.prange(natom):
        jx = site_current[0, i]
        jy = site_current[1, i]
        jz = site_current[2, i]
        for k in range(mensemble):
            btorque[0, i, k] = emom[1, i, k]*jz - emom[2, i, k]*jy
            btorque[1, i, k] = emom[2, i, k]*jx - emom[0, i, k]*jz
            btorque[2, i, k] = emom[0, i, k]*jy - emom[1, i, k]*jx
    return btorque


@nb.njit(parallel=True, cache=True)
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
    natom = emom.shape[1]
    mensemble = emom.shape[2]
    for i in nb.prange(natom):
        jx = site_current[0, i]
        jy = site_current[1, i]
        for k in range(mensemble):
            lm = damping[i]*mmom[i, k]
            she_btorque[0, i, k] = -factor*jx*emom[2, i, k] - lm*jy
            she_btorque[1, i, k] = -factor*jy*emom[2, i, k] + lm*jx
            she_btorque[2, i, k] = factor*jy*emom[1, i, k] + factor*jx*emom[0, i, k]
    return she_btorque


__all__ = ['stt_prefactor', 'zhang_li', 'fixed_layer', 'she_factor', 'spin_hall']
