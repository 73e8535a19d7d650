import pytest

from optbind.errors import MissingRequiredOptionError, MutuallyExclusiveSetError, NameInfo
from optbind.exceptions import SpecificationError
from optbind.parser import SpecificationModel
from optbind.parser.resolution_map import OptionResolutionMap


@pytest.fixture
def model():
    model = SpecificationModel()
    model.add_option("-i", "--input", required=True)
    model.add_option("-o", "--output")
    model.add_option("--weburl", mutually_exclusive_set="source")
    model.add_option("--ftpurl", mutually_exclusive_set="source")
    model.add_option("--fileurl", mutually_exclusive_set="source")
    return model


def test_lookup_by_short_and_long_name_resolves_same_spec(model):
    resolution = OptionResolutionMap(model)
    assert resolution.lookup("i") is resolution.lookup("input")
    assert resolution.lookup("i").dest == "input"
    assert resolution.lookup("missing") is None


def test_lookup_is_case_sensitive_by_default(model):
    resolution = OptionResolutionMap(model)
    assert resolution.lookup("INPUT") is None


def test_lookup_case_insensitive(model):
    resolution = OptionResolutionMap(model, case_sensitive=False)
    assert resolution.lookup("INPUT").dest == "input"
    assert resolution.lookup("I").dest == "input"


def test_case_insensitive_collision_is_a_specification_error():
    model = SpecificationModel()
    model.add_option("-v", dest="verbose", type=bool)
    model.add_option("-V", dest="show_version", type=bool)
    OptionResolutionMap(model, case_sensitive=True)
    with pytest.raises(SpecificationError):
        OptionResolutionMap(model, case_sensitive=False)


def test_required_rule_reports_absent_option(model):
    resolution = OptionResolutionMap(model)
    assert resolution.enforce_required_rule() == [
        MissingRequiredOptionError(NameInfo("i", "input"))
    ]


def test_required_rule_needs_a_received_value(model):
    resolution = OptionResolutionMap(model)
    spec = resolution.lookup("input")
    resolution.mark_defined(spec)
    assert len(resolution.enforce_required_rule()) == 1
    resolution.mark_received(spec)
    assert resolution.enforce_required_rule() == []


def test_mutually_exclusive_single_option_is_fine(model):
    resolution = OptionResolutionMap(model)
    resolution.record_mutually_exclusive_occurrence(resolution.lookup("weburl"))
    resolution.record_mutually_exclusive_occurrence(resolution.lookup("weburl"))
    assert resolution.enforce_mutually_exclusive_rule() == []


def test_mutually_exclusive_reports_each_option_in_order(model):
    resolution = OptionResolutionMap(model)
    for name in ("ftpurl", "weburl", "ftpurl"):
        resolution.record_mutually_exclusive_occurrence(resolution.lookup(name))
    assert resolution.occurrence_count("source") == 2
    assert resolution.enforce_mutually_exclusive_rule() == [
        MutuallyExclusiveSetError(NameInfo("", "ftpurl"), "source"),
        MutuallyExclusiveSetError(NameInfo("", "weburl"), "source"),
    ]


def test_mutually_exclusive_rule_can_be_disabled(model):
    resolution = OptionResolutionMap(model, mutually_exclusive=False)
    for name in ("ftpurl", "weburl"):
        resolution.record_mutually_exclusive_occurrence(resolution.lookup(name))
    assert resolution.enforce_mutually_exclusive_rule() == []


def test_options_without_set_are_not_counted(model):
    resolution = OptionResolutionMap(model)
    resolution.record_mutually_exclusive_occurrence(resolution.lookup("output"))
    assert resolution.enforce_mutually_exclusive_rule() == []


def test_reset_clears_per_pass_state(model):
    resolution = OptionResolutionMap(model)
    spec = resolution.lookup("input")
    resolution.mark_received(spec)
    resolution.record_mutually_exclusive_occurrence(resolution.lookup("weburl"))
    resolution.reset()
    assert not resolution.is_defined(spec)
    assert not resolution.received_value(spec)
    assert resolution.occurrence_count("source") == 0
