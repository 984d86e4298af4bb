from unittest.mock import patch

import pytest

from disposable import Container, GenericImage, ReadinessFailure, WaitError, WaitFor

from conftest import FakeDocker


@pytest.mark.unit
def test_generic_image_defaults():
    image = GenericImage("alpine:3.19")

    assert image.descriptor() == "alpine:3.19"
    assert image.wait_for == WaitFor.nothing()
    assert image.args() == []
    assert image.env_vars() == {}
    assert image.volumes() == {}
    assert image.entrypoint() is None
    assert image.ports() == []


@pytest.mark.unit
def test_generic_image_requires_reference():
    with pytest.raises(ValueError, match="cannot be empty"):
        GenericImage("")


@pytest.mark.unit
def test_with_methods_return_copies():
    base = GenericImage("postgres:16")
    configured = (
        base.with_env_var("POSTGRES_PASSWORD", "secret")
        .with_volume("/tmp/init", "/docker-entrypoint-initdb.d")
        .with_exposed_port(5432)
        .with_args(["-c", "fsync=off"])
        .with_entrypoint("/custom-entrypoint.sh")
        .with_wait_for(WaitFor.stderr_message("ready to accept connections"))
    )

    assert base.env_vars() == {}
    assert base.ports() == []
    assert configured.env_vars() == {"POSTGRES_PASSWORD": "secret"}
    assert configured.volumes() == {"/tmp/init": "/docker-entrypoint-initdb.d"}
    assert configured.ports() == [5432]
    assert configured.args() == ["-c", "fsync=off"]
    assert configured.entrypoint() == "/custom-entrypoint.sh"
    assert configured.wait_for.kind == "stderr"


@pytest.mark.unit
def test_accessors_do_not_expose_internal_state():
    image = GenericImage("alpine", env_vars={"A": "1"})

    image.env_vars()["B"] = "2"

    assert image.env_vars() == {"A": "1"}


@pytest.mark.unit
def test_wait_for_stdout_message():
    docker = FakeDocker(stdout="booting\nserver started\n")
    image = GenericImage("app").with_wait_for(WaitFor.stdout_message("server started"))

    with Container("abc123", docker, image):
        pass

    assert ("logs", "abc123") in docker.calls


@pytest.mark.unit
def test_wait_for_stderr_message():
    docker = FakeDocker(stdout="", stderr="warming up\nready\n")
    image = GenericImage("app", wait_for=WaitFor.stderr_message("ready"))

    with Container("abc123", docker, image):
        pass


@pytest.mark.unit
def test_wait_for_message_missing_fails_construction():
    docker = FakeDocker(stdout="booting\ncrashed\n")
    image = GenericImage("app", wait_for=WaitFor.stdout_message("server started"))

    with pytest.raises(ReadinessFailure) as exc_info:
        Container("abc123", docker, image)

    assert isinstance(exc_info.value.__cause__, WaitError)
    assert docker.teardown_calls("abc123") == [("stop", "abc123"), ("rm", "abc123")]


@pytest.mark.unit
def test_wait_for_duration_sleeps():
    docker = FakeDocker()
    image = GenericImage("app", wait_for=WaitFor.duration(2.5))

    with patch("disposable.image.time.sleep") as mock_sleep:
        with Container("abc123", docker, image):
            pass

    mock_sleep.assert_called_once_with(2.5)


@pytest.mark.unit
def test_unknown_wait_strategy_fails_construction():
    docker = FakeDocker()
    image = GenericImage("app", wait_for=WaitFor(kind="telepathy"))

    with pytest.raises(ReadinessFailure, match="Unknown wait strategy"):
        Container("abc123", docker, image)
