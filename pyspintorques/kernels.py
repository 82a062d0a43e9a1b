#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>
# Kernel class computing the spin torque fields of every simulation step
#
# pyspintorques Python package
# Authors: Colin Jermain, Minh-Hai Nguyen
# Copyright: 2014-2020
#
#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>
import logging

import numpy as np

from pyspintorques import core
from pyspintorques import numba as numba_kernels
from pyspintorques.buffers import TorqueBuffers
from pyspintorques.current import read_jvecfile
from pyspintorques.errors import BufferStateError
from pyspintorques.parameters import SttMode, SttParameters

logger = logging.getLogger(__name__)

BACKENDS = {
    'numba': numba_kernels,
    'numpy': core,
}


class SpinTorques:
    """ Computes the spin transfer and spin Hall torque fields that the
    integrator adds to the effective field

    natom: number of atoms
    mensemble: number of ensembles
    parameters: SttParameters, copied before the keyword updates
                (default: a new set with defaults)
    gradient: function (natom, mensemble, emom, site_current) -> dmomdr
              returning (j.grad)m, required for stt='A'
    backend: 'numba' (default) or 'numpy'

    Extra keyword parameters update the SttParameters, e.g.
    SpinTorques(natom, mensemble, stt='F', jvec=[0, 0, 1])
    """

    def __init__(self, natom, mensemble, parameters=None, gradient=None,
                 backend="numba", **params):
        self.natom = int(natom)
        self.mensemble = int(mensemble)
        if parameters is None:
            parameters = SttParameters()
        else:
            parameters = parameters.copy()
        parameters.update(**params)
        self.parameters = parameters
        self.gradient = gradient

        name = backend.lower()
        if name not in BACKENDS:
            raise ValueError("Unknown backend %r, use one of %s"
                             % (backend, sorted(BACKENDS)))
        self.backend = name
        self.kernels = BACKENDS[name]

        if parameters.stt is SttMode.ADIABATIC and gradient is None:
            raise ValueError("stt='A' requires a gradient function for dm/dr")
        if parameters.do_she:
            # Fail before allocating anything
            self.kernels.she_factor(parameters.she_angle, parameters.spin_pol,
                                    parameters.thick_ferro)

        self.site_current = read_jvecfile(self.natom, parameters)
        self.buffers = TorqueBuffers(parameters, self.natom, self.mensemble)
        self.make_torque()
        logger.info("Spin torques: stt=%s, do_she=%s, %d atoms, %d ensembles (%s)",
                    parameters.stt.value, "Y" if parameters.do_she else "N",
                    self.natom, self.mensemble, self.backend)


    def make_torque(self):
        """ Select the torque functions for the active modes
        """
        kernels = self.kernels
        buffers = self.buffers
        site_current = self.site_current
        natom, mensemble = self.natom, self.mensemble
        stt = self.parameters.stt
        beta = self.parameters.adibeta

        if stt is SttMode.DISABLED:
            def stt_func(damping, emom):
                pass
        elif stt is SttMode.ADIABATIC:
            gradient = self.gradient
            check = self._check_input
            def stt_func(damping, emom):
                dmomdr = gradient(natom, mensemble, emom, site_current)
                dmomdr = check('dmomdr', dmomdr, (3, natom, mensemble))
                np.copyto(buffers.dmomdr, dmomdr)
                kernels.zhang_li(emom, buffers.dmomdr, damping, beta,
                                 buffers.btorque, buffers.stt_prefac)
        elif stt is SttMode.FIXED_LAYER:
            def stt_func(damping, emom):
                kernels.fixed_layer(emom, site_current, buffers.btorque)
        else:
            raise ValueError("Unknown STT mode: %r" % (stt,))
        self.stt_torque = stt_func

        if self.parameters.do_she:
            she_angle = self.parameters.she_angle
            spin_pol = self.parameters.spin_pol
            thick_ferro = self.parameters.thick_ferro
            def she_func(damping, emom, mmom):
                factor = kernels.she_factor(she_angle, spin_pol, thick_ferro)
                kernels.spin_hall(emom, mmom, damping, site_current, factor,
                                  buffers.she_btorque)
        else:
            def she_func(damping, emom, mmom):
                pass
        self.she_torque = she_func


    def _check_input(self, name, array, shape):
        array = np.ascontiguousarray(array, dtype=np.float64)
        if array.shape != shape:
            raise ValueError("%s has shape %s, expected %s"
                             % (name, array.shape, shape))
        return array


    def calculate(self, damping, emom, mmom):
        """ Update the torque buffers for the current moments and return
        (btorque, she_btorque); a torque that is not computed is None

        damping: Gilbert damping per atom (natom,)
        emom: moment unit vectors (3, natom, mensemble)
        mmom: moment magnitudes (natom, mensemble)
        """
        if not self.buffers.allocated:
            raise BufferStateError("Spin torques have been released")
        shape = (self.natom, self.mensemble)
        damping = self._check_input('damping', damping, (self.natom,))
        emom = self._check_input('emom', emom, (3,) + shape)
        mmom = self._check_input('mmom', mmom, shape)

        self.stt_torque(damping, emom)
        self.she_torque(damping, emom, mmom)
        return self.btorque, self.she_btorque


    def release(self):
        """ Release the torque buffers """
        self.buffers.release()


    def __enter__(self):
        return self


    def __exit__(self, exc_type, exc_value, traceback):
        if self.buffers.allocated:
            self.buffers.release()
        return False


    @property
    def btorque(self):
        """ Spin transfer torque field (3, natom, mensemble) or None """
        return self.buffers.btorque

    @property
    def she_btorque(self):
        """ Spin Hall torque field (3, natom, mensemble) or None """
        return self.buffers.she_btorque

    @property
    def dmomdr(self):
        return self.buffers.dmomdr

    @property
    def stt_prefac(self):
        return self.buffers.stt_prefac
