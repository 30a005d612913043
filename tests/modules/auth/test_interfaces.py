from modules.auth.interfaces import ISessionResolver
from modules.auth.service import SessionResolver


class TestSessionResolverInterface:
    def test_interface_methods_exist(self):
        """ISessionResolver should define required methods."""
        for method in ["resolve", "validate_session"]:
            assert hasattr(ISessionResolver, method)

    def test_service_has_interface_methods(self):
        """SessionResolver should have all ISessionResolver methods."""
        for method in ["resolve", "validate_session"]:
            assert callable(getattr(SessionResolver, method, None))

    def test_service_is_subclass(self):
        """SessionResolver should be usable where ISessionResolver is expected."""
        assert issubclass(SessionResolver, ISessionResolver)
