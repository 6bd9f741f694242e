import pytest


@pytest.fixture(autouse=True)
def fresh_session():
    """Reset the process-wide session between tests."""
    from missing_routes.config import Settings
    from missing_routes.models import SubjectCategory
    from missing_routes.state import state

    state.center = None
    state.profile_category = SubjectCategory.ADULT
    state.clear_results()
    state.settings = Settings()
    yield state


@pytest.fixture
def anyio_backend():
    return "asyncio"
