import pytest
from hypothesis import given
from hypothesis import strategies as st

from slaphcontract.model import Quark
from slaphcontract.parsing import (
    ParseError,
    all_momentum_combinations,
    format_quark,
    make_correlator,
    make_operator_list,
    make_quark,
    parse_momentum_vector,
    quark_check,
)


def _valid_quark(**changes):
    fields = dict(
        type="u",
        number_of_rnd_vec=5,
        dilution_T="TB",
        number_of_dilution_T=2,
        dilution_E="EI",
        number_of_dilution_E=6,
        dilution_D="DI",
        number_of_dilution_D=4,
        id=0,
        path="/data/u",
    )
    fields.update(changes)
    return Quark(**fields)


@given(st.integers(min_value=0, max_value=6))
def test_momentum_combinations_have_requested_norm(p):
    moms = all_momentum_combinations(p)
    assert all(x * x + y * y + z * z == p for x, y, z in moms)
    assert moms == sorted(set(moms))


def test_momentum_zero_is_origin_only():
    assert all_momentum_combinations(0) == [(0, 0, 0)]


def test_momentum_combinations_closed_under_negation():
    moms = set(all_momentum_combinations(3))
    assert moms == {(-x, -y, -z) for x, y, z in moms}


def test_parse_momentum_vector():
    assert parse_momentum_vector("p(0,0,1)") == (0, 0, 1)
    assert parse_momentum_vector("P(1,-1,0)") == (1, -1, 0)


@pytest.mark.parametrize("text", ["p(1,2)", "p(a,b,c)", "p("])
def test_parse_momentum_vector_errors(text):
    with pytest.raises(ParseError):
        parse_momentum_vector(text)


def test_make_quark():
    quark = make_quark("u:5:TB:2:EI:6:DI:4:/data/u")
    assert quark == _valid_quark()


@pytest.mark.parametrize(
    "text", ["u:5:TB:2:EI:6:DI:4", "u:x:TB:2:EI:6:DI:4:/p", "u:5:TB:2:EI:6:DI:4:/p:x"]
)
def test_make_quark_errors(text):
    with pytest.raises(ParseError):
        make_quark(text)


def test_quark_check_prints_valid_quark(capsys):
    quark = _valid_quark()
    quark_check(quark)
    assert capsys.readouterr().out == format_quark(quark) + "\n"


@pytest.mark.parametrize(
    "changes",
    [
        {"type": "b"},
        {"number_of_rnd_vec": 0},
        {"dilution_T": "XX"},
        {"number_of_dilution_T": 0},
        {"dilution_E": "TB"},
        {"number_of_dilution_E": 0},
        {"dilution_D": "EI"},
        {"number_of_dilution_D": 0},
        {"number_of_dilution_D": 5},
    ],
)
def test_quark_check_errors(changes):
    with pytest.raises(ParseError):
        quark_check(_valid_quark(**changes))


def test_format_quark():
    text = format_quark(_valid_quark())
    assert text.startswith("\tQUARK type: ****  u  ****")
    assert "dilution scheme in time: TB2" in text
    assert text.endswith("\t\t/data/u\n")


def test_operator_single_momentum():
    ops = make_operator_list("g5.d0.p(0,0,1)")
    assert len(ops) == 1
    assert ops[0].gamma == [5]
    assert ops[0].displacement == ()
    assert ops[0].momentum == (0, 0, 1)


def test_operator_scalar_momenta_expand():
    ops = make_operator_list("g5.d0.p0,1")
    expected = all_momentum_combinations(0) + all_momentum_combinations(1)
    assert [op.momentum for op in ops] == expected
    assert all(op.gamma == [5] for op in ops)


def test_operator_displacements():
    ops = make_operator_list("g4.d>x|<y,>z.p(0,0,0)")
    assert [op.displacement for op in ops] == [
        ((">", "x"), ("<", "y")),
        ((">", "z"),),
    ]


def test_operator_list_concatenates_operators():
    first = make_operator_list("g5.d0.p(0,0,1)")
    second = make_operator_list("g4.d0.p1")
    both = make_operator_list("g5.d0.p(0,0,1):g4.d0.p1")
    assert both == first + second


@pytest.mark.parametrize("text", ["x5.d0.p(0,0,0)", "g5.d?.p(0,0,0)", "g5..d0", "gx"])
def test_operator_errors(text):
    with pytest.raises(ParseError):
        make_operator_list(text)


def test_make_correlator():
    corr = make_correlator("C20:Q0:Q1:Op0:Op1:GEVP:P(0,0,1)")
    assert corr.type == "C20"
    assert corr.quark_numbers == [0, 1]
    assert corr.operator_numbers == [0, 1]
    assert corr.gevp == "GEVP"
    assert corr.tot_mom == [(0, 0, 1)]


def test_correlator_scalar_total_momenta():
    corr = make_correlator("C2c:Q0:Q0:Op0:Op0:P0,1")
    assert corr.tot_mom == all_momentum_combinations(0) + all_momentum_combinations(1)


@pytest.mark.parametrize("text", ["C20:X1", "C20:Q0:Opx", "C20::Q0"])
def test_correlator_errors(text):
    with pytest.raises(ParseError):
        make_correlator(text)