import pytest

from accessmodel.errors import (
    DomainParameterError,
    NameNotFoundError,
    NamesNotFoundError,
    RoleManagerError,
)


def test_name_not_found_default_message():
    assert str(NameNotFoundError()) == "error: name does not exist"


def test_domain_parameter_default_message():
    assert str(DomainParameterError()) == "error: domain should be 1 parameter"


def test_names_not_found_default_message():
    assert str(NamesNotFoundError()) == "error: name1 or name2 does not exist"


@pytest.mark.parametrize(
    ("error_class", "message"),
    [
        (NameNotFoundError, "error: name does not exist"),
        (DomainParameterError, "error: domain should be 1 parameter"),
        (NamesNotFoundError, "error: name1 or name2 does not exist"),
    ],
)
def test_errors_belong_to_role_manager_family(error_class, message):
    error = error_class()
    assert isinstance(error, RoleManagerError)
    assert isinstance(error, Exception)
    assert error.args == (message,)


@pytest.mark.parametrize(
    ("raised", "message"),
    [
        (NameNotFoundError, "error: name does not exist"),
        (NamesNotFoundError, "error: name1 or name2 does not exist"),
        (DomainParameterError, "error: domain should be 1 parameter"),
    ],
)
def test_distinct_error_kinds_are_told_apart(raised, message):
    with pytest.raises(RoleManagerError) as info:
        raise raised()
    assert info.type is raised
    assert str(info.value) == message
    others = {NameNotFoundError, NamesNotFoundError, DomainParameterError} - {raised}
    assert [other for other in others if isinstance(info.value, other)] == []


def test_custom_message_overrides_default():
    assert str(NameNotFoundError("missing alice")) == "missing alice"