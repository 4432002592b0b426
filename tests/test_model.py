import pytest

from slaphcontract.model import (
    CorrelatorRequest,
    DiagramIndex,
    DiagramSpec,
    DilutedFactorIndex,
    DilutedFactorType,
    GlobalData,
    Location,
    OperatorLookup,
    QuantumNumbers,
    QuarklineSpec,
    TraceRequest,
    VdaggerVQuantumNumbers,
    displacement_to_string,
    format_quantum_numbers,
    gamma_to_string,
    momentum_to_string,
    num_times,
)


@pytest.mark.parametrize(
    "factor_type, expected",
    [(DilutedFactorType.Q0, 1), (DilutedFactorType.Q1, 2), (DilutedFactorType.Q2, 3)],
)
def test_num_times(factor_type, expected):
    assert num_times(factor_type) == expected


def test_num_times_accepts_value():
    assert num_times("Q2") == num_times(DilutedFactorType.Q2)


def test_displacement_to_string_empty():
    assert displacement_to_string(()) == "000"


def test_displacement_to_string_pairs():
    assert displacement_to_string(((">", "x"), ("<", "y"))) == ">x<y"


def test_gamma_and_momentum_strings():
    assert gamma_to_string([4, 5]) == "45"
    assert momentum_to_string((0, 1, -1)) == "01-1"


def test_format_quantum_numbers():
    qn = QuantumNumbers(gamma=[5], displacement=((">", "z"),), momentum=(1, 0, 0))
    assert format_quantum_numbers(qn) == (
        "\tmomentum: 100\n\tdisplacement: >z\n\tgamma struct: 5\n\n"
    )


def test_quarkline_is_loop():
    assert QuarklineSpec("Q1", 2, 2).is_loop()
    assert not QuarklineSpec("Q1", 0, 1).is_loop()


def test_operator_lookup_len():
    lookup = OperatorLookup()
    assert len(lookup) == 0
    lookup.vdaggerv_lookup.append(VdaggerVQuantumNumbers(0, (0, 0, 1)))
    lookup.vdaggerv_lookup.append(VdaggerVQuantumNumbers(1, (0, 0, 0)))
    assert len(lookup) == 2


def test_diagram_index_equality_ignores_id_and_gamma():
    a = DiagramIndex(0, "C2c_uu", [1, 2], [5])
    b = DiagramIndex(7, "C2c_uu", [1, 2])
    c = DiagramIndex(0, "C2c_uu", [2, 1])
    assert a == b
    assert not a == c


def test_diluted_factor_index_equality_uses_all_fields():
    a = DilutedFactorIndex(0, False, [5], [(0, 1)])
    assert a == DilutedFactorIndex(0, False, [5], [(0, 1)])
    assert not a == DilutedFactorIndex(0, True, [5], [(0, 1)])
    assert not a == DilutedFactorIndex(0, False, [4], [(0, 1)])


def test_correlator_request_equality_ignores_name():
    traces = [TraceRequest("trQ1Q1", 0, [Location.SOURCE, Location.SINK])]
    a = CorrelatorRequest(list(traces), "first")
    b = CorrelatorRequest(list(traces), "second")
    c = CorrelatorRequest([TraceRequest("trQ1Q1", 1, [Location.SOURCE])], "first")
    assert a == b
    assert not a == c


def test_trace_request_compares_locations():
    a = TraceRequest("trQ1", 0, [Location.SOURCE])
    assert not a == TraceRequest("trQ1", 0, [Location.SINK])


def test_global_data_defaults_are_independent():
    first = GlobalData()
    second = GlobalData()
    first.quarks.append("x")
    first.correlator_requests_map["C2c"] = []
    assert second.quarks == []
    assert second.correlator_requests_map == {}
    assert second.operator_lookuptable.index_of_unity == -1


def test_diagram_spec_holds_vertices_and_traces():
    spec = DiagramSpec(
        vertices=([0], [1]),
        traces=[[QuarklineSpec("Q1", 0, 1), QuarklineSpec("Q1", 1, 0)]],
    )
    assert spec.vertices[0] == [0]
    assert [ql.q2 for ql in spec.traces[0]] == [1, 0]