#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>
# Physical constants
#
# pyspintorques Python package
# Authors: Colin Jermain, Minh-Hai Nguyen
# Copyright: 2014-2020
#
#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>

# Constants in SI

ev    = 1.602176565e-19          # Electron charge (C)
gama  = 1.76e11                  # Gyromagnetic ratio (rad/(s T))

# Lattice constant assumed when none is given (BCC Fe, m)
alat_bcc_fe = 2.856e-10
