"""Checking and munging of the parameters read from the input file."""

from __future__ import annotations

from .model import GlobalData
from .parsing import ParseError, make_correlator, make_operator_list, make_quark, quark_check


class InputError(ValueError):
    """Raised when the input file holds missing or invalid parameters."""


def _mandatory_positive(name):
    return InputError(
        f'input file error: option "{name}" is mandatory and its value must be an '
        "integer greater than 0!"
    )


def check_lattice(gd: GlobalData):
    """Check the lattice extents and report lattice, paths and smearing."""
    extents = (
        ("Lt", gd.Lt, "\n\ttemporal lattice extent .................. "),
        ("Lx", gd.Lx, "\tspatial lattice extent in x direction .... "),
        ("Ly", gd.Ly, "\tspatial lattice extent in y direction .... "),
        ("Lz", gd.Lz, "\tspatial lattice extent in z direction .... "),
    )
    for name, value, label in extents:
        if value < 1:
            raise _mandatory_positive(name)
        print(f"{label}{value}")
    print()
    print(f"\tEnsemble ...................................... {gd.name_lattice}")
    print(f"\tResults will be saved to path:\n\t\t{gd.path_output}/")
    print(f"\tConfigurations will be read from:\n\t\t{gd.path_config}/")
    hyp = gd.hyp_parameters
    print(
        "\tConfigurations will be hyp smeared with parameter set "
        f"(alpha1, alpha2, N):\n\t\t{hyp.alpha1}, {hyp.alpha2}, {hyp.iterations}"
    )


def check_configs(start_config, end_config, delta_config):
    """Check the range of gauge configurations to process."""
    if start_config < 0:
        raise InputError(
            'input file error: option "start config" is mandatory and its value must '
            "be an integer greater or equal 0!"
        )
    if end_config < 0 or end_config < start_config:
        raise InputError(
            'input file error: option "end_config" is mandatory, its value must be an '
            "integer greater than 0, and it must be larger than start config!"
        )
    if delta_config < 0:
        raise _mandatory_positive("delta_config")
    print(
        f"\tprocessing configurations {start_config} to {end_config} "
        f"in steps of {delta_config}\n"
    )


def check_eigenvectors(gd: GlobalData):
    """Check the number of eigenvectors and report where they are read from."""
    if gd.number_of_eigen_vec < 1:
        raise _mandatory_positive("number_of_eigen_vec")
    print(f"\tnumber of eigen vectors .................. {gd.number_of_eigen_vec}")
    print(
        "\tEigenvectors will be read from files:\n\t\t"
        f'{gd.path_eigenvectors}/{gd.name_eigenvectors}".eigenvector.t.config"\n'
    )


def build_quarks(quark_configs):
    """Build quarks from their input strings, number them and check them."""
    try:
        quarks = [make_quark(text) for text in quark_configs]
        for quark_id, quark in enumerate(quarks):
            quark.id = quark_id
        for quark in quarks:
            quark_check(quark)
    except ParseError as error:
        raise InputError(str(error)) from error
    return quarks


def _build_operators(operator_strings):
    try:
        return [make_operator_list(text) for text in operator_strings]
    except ParseError as error:
        raise InputError(f"operator_input_data_handling: {error}") from error


def _build_correlators(correlator_strings):
    try:
        return [make_correlator(text) for text in correlator_strings]
    except ParseError as error:
        raise InputError(f"correlator_input_data_handling: {error}") from error


def input_handling(gd, quark_configs, operator_list_configs, correlator_list_configs):
    """Check the global parameters and fill in quarks, operators and correlators."""
    check_lattice(gd)
    check_configs(gd.start_config, gd.end_config, gd.delta_config)
    check_eigenvectors(gd)

    gd.quarks.extend(build_quarks(quark_configs))
    gd.operator_list.extend(_build_operators(operator_list_configs))
    gd.correlator_list.extend(_build_correlators(correlator_list_configs))