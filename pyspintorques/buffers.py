#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>
# Torque buffers allocated for the active spin-torque modes
#
# pyspintorques Python package
# Authors: Colin Jermain, Minh-Hai Nguyen
# Copyright: 2014-2020
#
#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>

import logging

import numpy as np

from pyspintorques.errors import BufferStateError
from pyspintorques.parameters import SttMode

logger = logging.getLogger(__name__)


def required_buffers(stt, do_she):
    """ Returns the names of the buffers needed by a mode combination

    stt: SttMode
    do_she: whether the spin Hall torque is computed
    """
    names = []
    if stt is SttMode.ADIABATIC:
        names += ['btorque', 'dmomdr', 'stt_prefac']
    elif stt is SttMode.FIXED_LAYER:
        names += ['btorque']
    if do_she:
        names += ['she_btorque']
    return names


class TorqueBuffers(object):
    """ Per-atom, per-ensemble torque arrays for one run

    Only the arrays required by the modes are allocated, the others are
    None. The buffers are allocated on construction and released by
    release() or at the end of a with-block.

    parameters: SttParameters
    natom: number of atoms
    mensemble: number of ensembles
    """
    def __init__(self, parameters, natom, mensemble):
        self.stt = parameters.stt
        self.do_she = parameters.do_she
        self.natom = int(natom)
        self.mensemble = int(mensemble)
        self.names = required_buffers(self.stt, self.do_she)
        self.btorque = None
        self.dmomdr = None
        self.stt_prefac = None
        self.she_btorque = None
        self.allocated = False
        self.allocate()


    def _shape(self, name):
        if name == 'stt_prefac':
            return (self.natom,)
        return (3, self.natom, self.mensemble)


    def allocate(self):
        """ Allocate the buffers, zero filled """
        if self.allocated:
            raise BufferStateError("Torque buffers are already allocated")
        for name in self.names:
            setattr(self, name, np.zeros(self._shape(name), dtype=np.float64))
        self.allocated = True
        logger.debug("Allocated torque buffers %s (%d bytes)",
                     self.names, self.nbytes)


    def release(self):
        """ Release the buffers """
        if not self.allocated:
            raise BufferStateError("Torque buffers are not allocated")
        nbytes = self.nbytes
        for name in self.names:
            setattr(self, name, None)
        self.allocated = False
        logger.debug("Released torque buffers %s (%d bytes)", self.names, nbytes)


    @property
    def nbytes(self):
        """ Total size of the allocated buffers in bytes """
        return sum(getattr(self, name).nbytes for name in self.names
                   if getattr(self, name) is not None)


    def __enter__(self):
        return self


    def __exit__(self, exc_type, exc_value, traceback):
        if self.allocated:
            self.release()
        return False
