import pytest

from spinwheel.animation.easing import Easing, get_easing


@pytest.mark.parametrize("easing", list(Easing))
def test_endpoints(easing):
    func = get_easing(easing)

    assert func(0.0) == pytest.approx(0.0)
    assert func(1.0) == 1.0


@pytest.mark.parametrize("easing", list(Easing))
def test_monotonic(easing):
    func = get_easing(easing)

    values = [func(i / 200) for i in range(201)]

    assert all(b >= a for a, b in zip(values, values[1:]))


@pytest.mark.parametrize("easing", [e for e in Easing if e is not Easing.LINEAR])
def test_ease_out_decelerates(easing):
    func = get_easing(easing)

    assert func(0.5) > 0.5


def test_lookup_by_name():
    assert get_easing("ease_out_cubic") is get_easing(Easing.EASE_OUT_CUBIC)
    assert get_easing("LINEAR")(0.25) == 0.25


def test_unknown_name_raises():
    with pytest.raises(ValueError):
        get_easing("bounce_forever")
