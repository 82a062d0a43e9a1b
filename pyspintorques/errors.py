#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>
# Exceptions raised by pyspintorques
#
# pyspintorques Python package
# Authors: Colin Jermain, Minh-Hai Nguyen
# Copyright: 2014-2020
#
#>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>


class SpinTorqueError(Exception):
    """ Base exception for all spin-torque errors """
    pass


class SiteCurrentError(SpinTorqueError, ValueError):
    """ The site dependent current file can not be mapped onto the atoms
    """
    def __init__(self, filename, lineno, reason):
        self.filename = filename
        self.lineno = lineno
        self.reason = reason
        super(SiteCurrentError, self).__init__(
            "%s, line %d: %s" % (filename, lineno, reason))


class BufferStateError(SpinTorqueError, RuntimeError):
    """ Torque buffers were used out of their allocate/release order """
    pass
