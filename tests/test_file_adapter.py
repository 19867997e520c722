import pytest

from accessmodel.file_adapter import (
    FileAdapter,
    Filter,
    FilteredFileAdapter,
    PolicyFileError,
)
from accessmodel.model import Model

MODEL_TEXT = """
[request_definition]
r = sub, obj, act

[policy_definition]
p = sub, obj, act

[role_definition]
g = _, _

[policy_effect]
e = some(where (p.eft == allow))

[matchers]
m = g(r.sub, p.sub) && r.obj == p.obj && r.act == p.act
"""

POLICY_TEXT = """p, alice, data1, read
p, bob, data2, write
p, data2_admin, data2, read
p, data2_admin, data2, write

# a comment
g, alice, data2_admin
"""

ALL_P = [
    ["alice", "data1", "read"],
    ["bob", "data2", "write"],
    ["data2_admin", "data2", "read"],
    ["data2_admin", "data2", "write"],
]


@pytest.fixture
def policy_path(tmp_path):
    path = tmp_path / "policy.csv"
    path.write_text(POLICY_TEXT, encoding="utf-8")
    return path


def new_model():
    return Model.from_text(MODEL_TEXT)


def test_load_policy_reads_rules(policy_path):
    model = new_model()
    FileAdapter(policy_path).load_policy(model)
    assert model.get_policy("p", "p") == ALL_P
    assert model.get_policy("g", "g") == [["alice", "data2_admin"]]


def test_load_policy_empty_path_raises():
    with pytest.raises(PolicyFileError, match="file path cannot be empty"):
        FileAdapter("").load_policy(new_model())


def test_save_policy_empty_path_raises():
    with pytest.raises(PolicyFileError):
        FileAdapter().save_policy(new_model())


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileAdapter(tmp_path / "absent.csv").load_policy(new_model())


def test_save_policy_format(policy_path, tmp_path):
    model = new_model()
    FileAdapter(policy_path).load_policy(model)
    out = tmp_path / "out.csv"
    FileAdapter(out).save_policy(model)
    text = out.read_text(encoding="utf-8")
    assert text.splitlines()[0] == "p, alice, data1, read"
    assert text.splitlines()[-1] == "g, alice, data2_admin"
    assert not text.endswith("\n")


def test_save_and_reload_round_trip(policy_path, tmp_path):
    model = new_model()
    FileAdapter(policy_path).load_policy(model)
    model.add_policy("p", "p", ["eve", "data3", "read"])
    out = tmp_path / "out.csv"
    FileAdapter(out).save_policy(model)

    reloaded = new_model()
    FileAdapter(out).load_policy(reloaded)
    assert reloaded.get_policy("p", "p") == model.get_policy("p", "p")
    assert reloaded.get_policy("g", "g") == model.get_policy("g", "g")


@pytest.mark.parametrize(
    "call",
    [
        lambda a: a.add_policy("p", "p", ["x", "y", "z"]),
        lambda a: a.remove_policy("p", "p", ["x", "y", "z"]),
        lambda a: a.remove_filtered_policy("p", "p", 0, "x"),
    ],
)
def test_single_rule_changes_unsupported(policy_path, call):
    with pytest.raises(NotImplementedError):
        call(FileAdapter(policy_path))


def test_filtered_adapter_starts_filtered(policy_path):
    adapter = FilteredFileAdapter(policy_path)
    assert adapter.is_filtered() is True


def test_filtered_load_by_subject(policy_path):
    model = new_model()
    adapter = FilteredFileAdapter(policy_path)
    adapter.load_filtered_policy(model, Filter(p=["alice"]))
    assert model.get_policy("p", "p") == [["alice", "data1", "read"]]
    assert model.get_policy("g", "g") == [["alice", "data2_admin"]]
    assert adapter.is_filtered() is True


def test_filtered_load_empty_value_matches_anything(policy_path):
    model = new_model()
    FilteredFileAdapter(policy_path).load_filtered_policy(
        model, Filter(p=["", "data2"], g=["bob"])
    )
    assert model.get_policy("p", "p") == ALL_P[1:]
    assert model.get_policy("g", "g") == []


def test_filter_longer_than_line_skips_line(policy_path):
    model = new_model()
    FilteredFileAdapter(policy_path).load_filtered_policy(
        model, Filter(g=["alice", "data2_admin", "extra"])
    )
    assert model.get_policy("g", "g") == []
    assert model.get_policy("p", "p") == ALL_P


def test_filtered_load_none_loads_everything(policy_path):
    model = new_model()
    adapter = FilteredFileAdapter(policy_path)
    adapter.load_filtered_policy(model, None)
    assert model.get_policy("p", "p") == ALL_P
    assert adapter.is_filtered() is False


def test_filtered_load_invalid_filter_type(policy_path):
    with pytest.raises(PolicyFileError, match="invalid filter type"):
        FilteredFileAdapter(policy_path).load_filtered_policy(new_model(), ["alice"])


def test_filtered_load_empty_path_raises():
    with pytest.raises(PolicyFileError):
        FilteredFileAdapter("").load_filtered_policy(new_model(), Filter())


def test_filtered_save_refused(policy_path):
    model = new_model()
    adapter = FilteredFileAdapter(policy_path)
    adapter.load_filtered_policy(model, Filter(p=["alice"]))
    with pytest.raises(PolicyFileError, match="cannot save a filtered policy"):
        adapter.save_policy(model)
    assert policy_path.read_text(encoding="utf-8") == POLICY_TEXT


def test_filtered_save_after_full_load(policy_path, tmp_path):
    model = new_model()
    FilteredFileAdapter(policy_path).load_policy(model)
    out = tmp_path / "out.csv"
    saver = FilteredFileAdapter(out)
    saver.load_filtered_policy(new_model(), None) if out.exists() else None
    saver._filtered = False
    saver.save_policy(model)

    reloaded = new_model()
    FileAdapter(out).load_policy(reloaded)
    assert reloaded.get_policy("p", "p") == ALL_P


def test_full_load_clears_filtered_flag(policy_path):
    model = new_model()
    adapter = FilteredFileAdapter(policy_path)
    adapter.load_filtered_policy(model, Filter(p=["bob"]))
    assert adapter.is_filtered() is True
    adapter.load_policy(new_model())
    assert adapter.is_filtered() is False