"""Parsing of the quark, operator and correlator strings of the input file."""

from __future__ import annotations

import re

from .model import Correlator, Displacement, Momentum, QuantumNumbers, Quark

_INTEGER = re.compile(r"[+-]?[0-9]+")


class ParseError(ValueError):
    """Raised when an input string is malformed or holds invalid values."""


def _to_int(text: str, what: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ParseError(f"cannot read {what} {text!r} as an integer")
    return int(text)


def all_momentum_combinations(p):
    """All integer 3-momenta whose squared norm equals ``p``.

    The result is ordered lexicographically by components.
    """
    return [
        (p1, p2, p3)
        for p1 in range(-p, p + 1)
        for p2 in range(-p, p + 1)
        for p3 in range(-p, p + 1)
        if p1 * p1 + p2 * p2 + p3 * p3 == p
    ]


def parse_momentum_vector(text):
    """Read a momentum written as ``p(x,y,z)`` or ``P(x,y,z)``.

    The two leading characters and the closing parenthesis are dropped.
    """
    if len(text) < 3:
        raise ParseError(f"malformed momentum vector {text!r}")
    tokens = text[2:-1].split(",")
    if len(tokens) < 3:
        raise ParseError(f"momentum vector {text!r} needs three components")
    x, y, z = (_to_int(token, "momentum component") for token in tokens[:3])
    return (x, y, z)


def _resized(items, size):
    """Copy of ``items`` truncated or padded with empty lists to ``size``."""
    result = list(items[:size])
    result.extend([] for _ in range(size - len(result)))
    return result


def _parse_displacements(text) -> list[Displacement]:
    directions = []
    for token in text[1:].split(","):
        steps = []
        for part in token.split("|"):
            if len(part) < 2:
                raise ParseError(f"malformed displacement {part!r} in {text!r}")
            steps.append((part[0], part[1]))
        directions.append(tuple(steps))
    return directions


def make_quark(quark_string):
    """Build a quark from ``flavor:nb_rnd:dilT_type:dilT:dilE_type:dilE:dilD_type:dilD:path``."""
    tokens = quark_string.split(":")
    if len(tokens) != 9:
        raise ParseError(
            f"the argument {quark_string!r} for option 'quarks.quark' is invalid"
        )
    return Quark(
        type=tokens[0],
        number_of_rnd_vec=_to_int(tokens[1], "number of random vectors"),
        dilution_T=tokens[2],
        number_of_dilution_T=_to_int(tokens[3], "time dilution"),
        dilution_E=tokens[4],
        number_of_dilution_E=_to_int(tokens[5], "eigenvector dilution"),
        dilution_D=tokens[6],
        number_of_dilution_D=_to_int(tokens[7], "Dirac dilution"),
        id=0,
        path=tokens[8],
    )


def quark_check(quark):
    """Raise ``ParseError`` for invalid quark settings, otherwise print the quark."""
    if quark.type not in ("u", "d", "s", "c"):
        raise ParseError("quarks.quark.type must be u, d, s or c")
    if quark.number_of_rnd_vec < 1:
        raise ParseError("quarks.quark.number_of_rnd_vec must be greater than 0")
    if quark.dilution_T not in ("TI", "TB", "TF"):
        raise ParseError("quarks.quark.dilution_T must be TI, TB, TF")
    if quark.number_of_dilution_T < 1:
        raise ParseError(
            "quarks.quark.number_of_dilution_T must be greater than 0 and smaller "
            "than the temporal extent"
        )
    if quark.dilution_E not in ("EI", "EB", "EF"):
        raise ParseError("quarks.quark.dilution_E must be EI, EB or EF")
    if quark.number_of_dilution_E < 1:
        raise ParseError(
            "quarks.quark.number_of_dilution_E must be greater than 0 and smaller "
            "than number of eigen vectors"
        )
    if quark.dilution_D not in ("DI", "DB", "DF"):
        raise ParseError("quarks.quark.dilution_D must be DI, DB or DF")
    if not 1 <= quark.number_of_dilution_D <= 4:
        raise ParseError(
            "quarks.quark.number_of_dilution_D must be greater than 0 and smaller than 5"
        )
    print(format_quark(quark))


def format_quark(quark):
    """Human-readable description of a quark."""
    return (
        f"\tQUARK type: ****  {quark.type}  ****"
        f"\n\t number of random vectors: {quark.number_of_rnd_vec}"
        f"\n\t dilution scheme in time: {quark.dilution_T}{quark.number_of_dilution_T}"
        f"\n\t dilution scheme in ev space: {quark.dilution_E}"
        f"{quark.number_of_dilution_E}"
        f"\n\t dilution scheme in Dirac space: {quark.dilution_D}"
        f"{quark.number_of_dilution_D}"
        f"\n\t path of the perambulator and random vectors:\n\t\t{quark.path}\n"
    )


def make_operator_list(operator_string):
    """Build the operators described by a ``:``-separated list.

    Each operator is made of ``.``-separated parts: ``g<n>`` for a gamma
    structure, ``d0`` or ``d>x|<y,...`` for displacements and ``p(x,y,z)`` or
    ``p<n>,<m>,...`` for momenta, where a scalar stands for all momenta of that
    squared norm. All momentum and displacement combinations are produced.
    """
    op_list: list[QuantumNumbers] = []

    for op_token in operator_string.split(":"):
        gammas: list[int] = []
        disp_dirs: list[Displacement] = []
        mom_vec: list[list[Momentum]] = []

        for part in op_token.split("."):
            if part.startswith("g"):
                gammas.append(_to_int(part[1:], "gamma index"))
            elif part.startswith("d"):
                if part[1:2] == "0":
                    disp_dirs.append(())
                elif part[1:2] in ("<", ">"):
                    disp_dirs = _parse_displacements(part)
                else:
                    raise ParseError(
                        "Something wrong with the displacement in the operator "
                        "definition!"
                    )
            elif part.startswith("p"):
                if part[1:2] == "(":
                    mom_vec = _resized(mom_vec, 1)
                    mom_vec[0].append(parse_momentum_vector(part))
                else:
                    tokens = part[1:].split(",")
                    mom_vec = _resized(mom_vec, len(tokens))
                    for moms, token in zip(mom_vec, tokens):
                        moms.extend(
                            all_momentum_combinations(_to_int(token, "momentum"))
                        )
            else:
                raise ParseError("There is something wrong with the operators!")

        for moms in mom_vec:
            for mom in moms:
                for disp in disp_dirs:
                    op_list.append(
                        QuantumNumbers(gamma=list(gammas), displacement=disp, momentum=mom)
                    )

    print(f"op_list has size: {len(op_list)}")
    return op_list


def make_correlator(correlator_string):
    """Build a correlator from ``C<type>:Q<n>:...:Op<n>:...[:G<gevp>][:P<mom>]``."""
    correlator = Correlator()

    for token in correlator_string.split(":"):
        if token.startswith("C"):
            correlator.type = token
        elif token.startswith("Q"):
            correlator.quark_numbers.append(_to_int(token[1:], "quark number"))
        elif token.startswith("Op"):
            correlator.operator_numbers.append(_to_int(token[2:], "operator number"))
        elif token.startswith("G"):
            correlator.gevp = token
        elif token.startswith("P"):
            if token[1:2] == "(":
                correlator.tot_mom.append(parse_momentum_vector(token))
            else:
                for part in token[1:].split(","):
                    correlator.tot_mom.extend(
                        all_momentum_combinations(_to_int(part, "total momentum"))
                    )
        else:
            raise ParseError(
                "There is something wrong with the correlators in the input file!"
            )

    return correlator