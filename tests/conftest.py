"""Shared fixtures for the copyright-waiver test suite."""

from copyright_waiver.testing.conftest import (  # noqa: F401
    cancellation_token,
    commit_identity,
    make_run,
    mock_forge,
    mock_git,
    ssh_credentials,
    ssh_key_file,
    unlicense_text,
    workspace,
)

from hypothesis import HealthCheck, settings

# One-time Unicode table construction on a cold cache can trip the
# input-generation speed health check; it is not a property failure.
settings.register_profile("default", suppress_health_check=[HealthCheck.too_slow])
settings.load_profile("default")
