#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>
# Spin transfer and spin Hall torques for atomistic spin dynamics
#
# pyspintorques Python package
# Authors: Colin Jermain, Minh-Hai Nguyen
# Copyright: 2014-2020
#
#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>

import logging

from pyspintorques.errors import SpinTorqueError, SiteCurrentError, BufferStateError
from pyspintorques.parameters import (SttMode, SttParameters, read_parameters,
                                      read_parameters_file)
from pyspintorques.current import read_jvecfile
from pyspintorques.buffers import TorqueBuffers
from pyspintorques.kernels import SpinTorques
from pyspintorques.diagnostics import current_density, total_moment

__version__ = '0.1.0'

logging.getLogger(__name__).addHandler(logging.NullHandler())
