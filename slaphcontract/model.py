"""Data types shared by the input handling and the lookup-table construction."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

Momentum = tuple[int, int, int]
Displacement = tuple[tuple[str, str], ...]

MAX_RND_IDS = 10
MAX_USED_RND_IDS = 6


class DilutedFactorType(enum.Enum):
    """Kind of diluted quark-line factor; Q0 was formerly called rVdaggerVr."""

    Q0 = "Q0"
    Q1 = "Q1"
    Q2 = "Q2"


_NUM_TIMES = {
    DilutedFactorType.Q0: 1,
    DilutedFactorType.Q1: 2,
    DilutedFactorType.Q2: 3,
}


def num_times(factor_type):
    """Number of time indices a factor of the given type depends on."""
    return _NUM_TIMES[DilutedFactorType(factor_type)]


class Location(enum.Enum):
    """Whether a vertex sits at the source or the sink time slice."""

    SOURCE = "source"
    SINK = "sink"


@dataclass
class VdaggerVQuantumNumbers:
    """Quantum numbers identifying one V^dagger exp(ipx) V operator."""

    id: int
    momentum: Momentum
    displacement: Displacement = ()


@dataclass
class OperatorLookup:
    """Unique VdaggerV operators and where the unit operator sits among them."""

    vdaggerv_lookup: list[VdaggerVQuantumNumbers] = field(default_factory=list)
    index_of_unity: int = -1
    need_gaugefield: bool = False

    def __len__(self):
        return len(self.vdaggerv_lookup)


@dataclass
class DilutedFactorIndex:
    """Indices that identify one diluted factor (Q0, Q1 or Q2)."""

    id_vdaggerv: int
    need_vdaggerv_daggering: bool
    gamma: list[int] = field(default_factory=list)
    rnd_vec_ids: list[tuple[int, int]] = field(default_factory=list)


@dataclass
class DiagramIndex:
    """Everything needed to build and write one correlator.

    Two indices are equal when their dataset name and lookup agree.
    """

    id: int = field(compare=False)
    hdf5_dataset_name: str
    lookup: list[int]
    gamma: list[int] = field(default_factory=list, compare=False)


@dataclass
class RandomVectorConstruction:
    """How many random vectors are needed, their length and their files."""

    nb_entities: int = 0
    length: int = 0
    filename_list: list[str] = field(default_factory=list)


@dataclass
class PerambulatorConstruction:
    """How many perambulators are needed, their shapes and their files."""

    nb_entities: int = 0
    size_rows: list[int] = field(default_factory=list)
    size_cols: list[int] = field(default_factory=list)
    filename_list: list[str] = field(default_factory=list)


@dataclass
class Quark:
    """Flavour, random vectors, dilution scheme, path and id of one quark."""

    type: str
    number_of_rnd_vec: int
    dilution_T: str
    number_of_dilution_T: int
    dilution_E: str
    number_of_dilution_E: int
    dilution_D: str
    number_of_dilution_D: int
    id: int = 0
    path: str = ""


@dataclass
class QuantumNumbers:
    """Dirac structure, displacement and momentum of one field operator."""

    gamma: list[int] = field(default_factory=list)
    displacement: Displacement = ()
    momentum: Momentum = (0, 0, 0)


@dataclass
class Correlator:
    """A correlator request from the input file."""

    type: str = ""
    quark_numbers: list[int] = field(default_factory=list)
    operator_numbers: list[int] = field(default_factory=list)
    gevp: str = ""
    tot_mom: list[Momentum] = field(default_factory=list)


@dataclass
class HypPars:
    """Hypercubic blocking parameters for the gauge links."""

    alpha1: float = 0.0
    alpha2: float = 0.0
    iterations: int = 0


@dataclass(frozen=True)
class QuarklineSpec:
    """One quark line of a diagram, running from vertex q1 to vertex q2."""

    name: str
    q1: int
    q2: int

    def is_loop(self):
        return self.q1 == self.q2


@dataclass
class DiagramSpec:
    """Source and sink vertices of a diagram and its traces of quark lines."""

    vertices: tuple[list[int], list[int]]
    traces: list[list[QuarklineSpec]]


@dataclass
class TraceRequest:
    """A trace by name and lookup id, with the location of each of its vertices."""

    tr_name: str
    tr_id: int
    locations: list[Location] = field(default_factory=list)


@dataclass
class CorrelatorRequest:
    """The traces making up one correlator.

    Two requests are equal when their traces agree; the dataset name is not
    compared.
    """

    trace_requests: list[TraceRequest] = field(default_factory=list)
    hdf5_dataset_name: str = field(default="", compare=False)


@dataclass
class GlobalData:
    """All parameters, flags, paths and lookup tables of a contraction run."""

    Lx: int = 0
    Ly: int = 0
    Lz: int = 0
    Lt: int = 0
    dim_row: int = 0
    V_TS: int = 0
    V_for_lime: int = 0
    number_of_eigen_vec: int = 0
    number_of_inversions: int = 0
    start_config: int = 0
    end_config: int = 0
    delta_config: int = 0
    verbose: int = 0
    nb_eigen_threads: int = 0
    path_eigenvectors: str = ""
    name_eigenvectors: str = ""
    filename_eigenvectors: str = ""
    path_perambulators: str = ""
    name_perambulators: str = ""
    name_lattice: str = ""
    filename_ending_correlators: str = ""
    path_output: str = ""
    path_config: str = ""
    handling_vdaggerv: str = ""
    path_vdaggerv: str = ""
    rnd_vec_construct: RandomVectorConstruction = field(
        default_factory=RandomVectorConstruction
    )
    peram_construct: PerambulatorConstruction = field(
        default_factory=PerambulatorConstruction
    )
    quarks: list[Quark] = field(default_factory=list)
    operator_list: list[list[QuantumNumbers]] = field(default_factory=list)
    correlator_list: list[Correlator] = field(default_factory=list)
    quarkline_lookuptable: dict[str, list[DilutedFactorIndex]] = field(
        default_factory=dict
    )
    operator_lookuptable: OperatorLookup = field(default_factory=OperatorLookup)
    trace_indices_map: dict[str, list[list[int]]] = field(default_factory=dict)
    correlator_requests_map: dict[str, list[CorrelatorRequest]] = field(
        default_factory=dict
    )
    # Maps |P|^2 to the largest allowed |p_1|^2 + |p_2|^2 + ...
    momentum_cutoff: dict[int, int] = field(default_factory=dict)
    hyp_parameters: HypPars = field(default_factory=HypPars)
    single_time_slice_combination: int = 0


def gamma_to_string(gammas):
    """Concatenate the gamma indices."""
    return "".join(str(g) for g in gammas)


def momentum_to_string(momentum):
    """Concatenate the three momentum components."""
    return "".join(str(p) for p in momentum)


def displacement_to_string(displacement):
    """Concatenate the displacement pairs; no displacement reads ``000``."""
    if not displacement:
        return "000"
    return "".join(direction + axis for direction, axis in displacement)


def format_quantum_numbers(qn):
    """Human-readable description of one operator's quantum numbers."""
    displacement = "".join(direction + axis for direction, axis in qn.displacement)
    return (
        f"\tmomentum: {momentum_to_string(qn.momentum)}"
        f"\n\tdisplacement: {displacement}"
        f"\n\tgamma struct: {gamma_to_string(qn.gamma)}\n\n"
    )