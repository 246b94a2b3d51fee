import pytest

from channel_lib.services import ServiceContainer


def test_register_and_resolve():
    c = ServiceContainer()
    svc = object()
    c.register_singleton('a', svc)
    assert c.get('a') is svc
    assert 'a' in c and 'b' not in c


def test_replacing_a_service():
    c = ServiceContainer()
    c.register_singleton('a', 1)
    c.register_singleton('a', 2)
    assert c.get('a') == 2


def test_missing_service_raises_key_error():
    with pytest.raises(KeyError):
        ServiceContainer().get('missing')
