import numpy as np
import pytest

from pyspintorques import SpinTorques, SttParameters, BufferStateError

backends = pytest.mark.parametrize("backend", ["numpy", "numba"])


def two_moments():
    emom = np.zeros((3, 2, 1))
    emom[:, 0, 0] = (1.0, 0.0, 0.0)
    emom[:, 1, 0] = (0.0, 1.0, 0.0)
    return emom


@backends
def test_fixed_layer_two_atoms(backend):
    with SpinTorques(2, 1, stt='F', jvec=[0, 0, 1], jsite='N',
                     backend=backend) as torques:
        btorque, she_btorque = torques.calculate(np.zeros(2), two_moments(),
                                                 np.ones((2, 1)))
        assert she_btorque is None
        assert np.allclose(btorque[:, 0, 0], [0, -1, 0])
        assert np.allclose(btorque[:, 1, 0], [1, 0, 0])
        assert btorque is torques.btorque


@backends
def test_disabled_is_noop(backend):
    torques = SpinTorques(3, 2, backend=backend)
    btorque, she_btorque = torques.calculate(np.zeros(3), np.ones((3, 3, 2)),
                                             np.ones((3, 2)))
    assert btorque is None and she_btorque is None
    torques.release()


@backends
def test_adiabatic_calls_gradient(backend):
    rng = np.random.default_rng(7)
    natom, mensemble = 4, 2
    dmomdr = rng.normal(size=(3, natom, mensemble))
    calls = []

    def gradient(n, m, emom, site_current):
        calls.append((n, m, site_current.shape))
        return dmomdr

    params = SttParameters(stt='A', adibeta=0.1, jvec=[1, 0, 0])
    torques = SpinTorques(natom, mensemble, params, gradient=gradient,
                          backend=backend)
    emom = rng.normal(size=(3, natom, mensemble))
    emom /= np.linalg.norm(emom, axis=0)
    damping = np.full(natom, 0.05)
    btorque, _ = torques.calculate(damping, emom, np.ones((natom, mensemble)))

    assert calls == [(natom, mensemble, (3, natom))]
    assert np.array_equal(torques.dmomdr, dmomdr)
    assert np.allclose(torques.stt_prefac, -(1 + 0.1*0.05))
    expected = (0.05 - 0.1)*dmomdr - (1 + 0.1*0.05)*np.cross(emom, dmomdr, axis=0)
    assert np.allclose(btorque, expected)


def test_adiabatic_needs_gradient():
    with pytest.raises(ValueError):
        SpinTorques(2, 1, stt='A')


@backends
def test_she_combined_with_fixed_layer(backend):
    torques = SpinTorques(2, 1, stt='F', do_she='Y', jvec=[1, 0, 0],
                          she_angle=0.2, spin_pol=0.5, thick_ferro=2.0,
                          backend=backend)
    damping = np.array([0.1, 0.0])
    mmom = np.array([[2.0], [1.0]])
    btorque, she = torques.calculate(damping, two_moments(), mmom)
    # factor = 0.2/(0.5*2.0)
    assert np.allclose(she[:, 0, 0], [0.0, 0.2, 0.2])
    assert np.allclose(she[:, 1, 0], [0.0, 0.0, 0.0])
    assert np.allclose(btorque[:, 0, 0], [0, 0, 0])
    assert np.allclose(btorque[:, 1, 0], [0, 0, -1])


def test_she_needs_polarization_and_thickness():
    with pytest.raises(ZeroDivisionError):
        SpinTorques(2, 1, do_she='Y', she_angle=0.1)


def test_input_shapes_are_checked():
    torques = SpinTorques(2, 1, stt='F', jvec=[0, 0, 1])
    with pytest.raises(ValueError):
        torques.calculate(np.zeros(3), two_moments(), np.ones((2, 1)))
    with pytest.raises(ValueError):
        torques.calculate(np.zeros(2), np.zeros((3, 2, 2)), np.ones((2, 1)))


def test_unknown_backend():
    with pytest.raises(ValueError):
        SpinTorques(2, 1, backend="cuda")


def test_calculate_after_release():
    torques = SpinTorques(2, 1, stt='F')
    torques.release()
    with pytest.raises(BufferStateError):
        torques.calculate(np.zeros(2), two_moments(), np.ones((2, 1)))
    with pytest.raises(BufferStateError):
        torques.release()


def test_site_current_from_file(tmp_path):
    jfile = tmp_path / "jvecfile"
    jfile.write_text("1 0 0 1\n2 0 0 -1\n")
    torques = SpinTorques(2, 1, stt='F', jsite='Y', jvecfile=str(jfile),
                          backend="numpy")
    btorque, _ = torques.calculate(np.zeros(2), two_moments(), np.ones((2, 1)))
    assert np.allclose(btorque[:, 0, 0], [0, -1, 0])
    assert np.allclose(btorque[:, 1, 0], [-1, 0, 0])


@backends
def test_gradient_shape_is_checked(backend):
    def gradient(n, m, emom, site_current):
        return np.ones((3, 1, 1))

    torques = SpinTorques(4, 2, stt='A', gradient=gradient, backend=backend)
    with pytest.raises(ValueError):
        torques.calculate(np.zeros(4), np.ones((3, 4, 2)), np.ones((4, 2)))


def test_parameters_are_not_modified():
    params = SttParameters(stt='N')
    torques = SpinTorques(2, 1, params, stt='F', jvec=[0, 0, 1])
    assert params.stt.value == 'N'
    assert np.array_equal(params.jvec, [0, 0, 0])
    assert torques.parameters.stt.value == 'F'
