"""Lookup tables of unique quantum number combinations built from the input lists.

The lookup tables hold only unique combinations; the lists are replaced by
index lists that refer to them. This avoids computing an operator or a
correlator twice.
"""

from __future__ import annotations

from .cartesian import CartesianProduct
from .model import (
    CorrelatorRequest,
    DilutedFactorIndex,
    Location,
    TraceRequest,
    VdaggerVQuantumNumbers,
    displacement_to_string,
    gamma_to_string,
    momentum_to_string,
)


class LookupError_(ValueError):
    """Raised when the lookup tables cannot be built from the given input."""


def _add(a, b):
    return tuple(x + y for x, y in zip(a, b))


def _negated(momentum):
    return tuple(-c for c in momentum)


def _norm_sq(momentum):
    return sum(c * c for c in momentum)


def unique_push_back(items, element):
    """Append ``element`` unless an equal one is present; return its index."""
    for index, item in enumerate(items):
        if item == element:
            return index
    items.append(element)
    return len(items) - 1


def build_quantum_numbers_from_correlator_list(
    correlator, operator_list, momentum_cutoff, spec
):
    """All operator combinations of a correlator allowed by the conservation laws.

    Combinations are enumerated over the operators at every vertex of the
    diagram ``spec``. Total source momenta outside ``correlator.tot_mom`` (when
    given) are dropped, as are those whose sum of squared individual momenta
    exceeds ``momentum_cutoff[|P|^2]``. For diagrams with sink vertices the
    sink momentum must cancel the source momentum; each result then lists the
    operators by global vertex index. Source-only diagrams yield the source
    operators alone.
    """
    qn_op = []
    for op_number in correlator.operator_numbers:
        if not 0 <= op_number < len(operator_list):
            raise LookupError_(
                f"Operator with ID {op_number} which is used in [correlator_lists] is "
                "not defined. Please adjust your parameter file."
            )
        qn_op.append(operator_list[op_number])

    print(f"Constructing momentum combinations for {correlator.type}")

    source_vertices, sink_vertices = spec.vertices

    def operators_at(vertex):
        if not 0 <= vertex < len(qn_op):
            raise LookupError_(
                f"Diagram {correlator.type} needs an operator for vertex {vertex}, "
                f"but only {len(qn_op)} operators are given."
            )
        return qn_op[vertex]

    source_ops = [operators_at(vertex) for vertex in source_vertices]
    sink_ops = [operators_at(vertex) for vertex in sink_vertices]
    num_all = len(source_vertices) + len(sink_vertices)
    tot_mom = [tuple(p) for p in correlator.tot_mom]

    result = []
    for indices_source in CartesianProduct(len(ops) for ops in source_ops):
        qn_source = []
        qn_all = [None] * num_all
        for vertex, ops, index in zip(source_vertices, source_ops, indices_source):
            qn = ops[index]
            qn_source.append(qn)
            qn_all[vertex] = qn

        p_so = (0, 0, 0)
        sum_norm_sq = 0
        for qn in qn_source:
            p_so = _add(p_so, qn.momentum)
            sum_norm_sq += _norm_sq(qn.momentum)

        if tot_mom and p_so not in tot_mom:
            continue

        try:
            cutoff = momentum_cutoff[_norm_sq(p_so)]
        except KeyError:
            raise LookupError_(
                f"No momentum cutoff is defined for |P|^2 = {_norm_sq(p_so)}."
            ) from None
        if sum_norm_sq > cutoff:
            continue

        if not sink_vertices:
            result.append(qn_source)
            continue

        for indices_sink in CartesianProduct(len(ops) for ops in sink_ops):
            combination = list(qn_all)
            p_si = (0, 0, 0)
            for vertex, ops, index in zip(sink_vertices, sink_ops, indices_sink):
                qn = ops[index]
                combination[vertex] = qn
                p_si = _add(p_si, qn.momentum)
            if p_so == _negated(p_si):
                result.append(combination)

    return result


def build_vdaggerv_lookup(quantum_numbers, vdaggerv_lookup):
    """Extend ``vdaggerv_lookup`` with the VdaggerV operators needed.

    An operator with the opposite momentum is obtained by hermitian
    conjugation, so it is reused instead of added. Returns, for every entry of
    ``quantum_numbers``, a list of ``(vdaggerv id, needs daggering)`` pairs.
    """
    vdv_indices = []
    for qn_vec in quantum_numbers:
        row = []
        for qn in qn_vec:
            momentum = tuple(qn.momentum)
            negative = _negated(momentum)
            found = next(
                (
                    position
                    for position, vdv in enumerate(vdaggerv_lookup)
                    if vdv.displacement == qn.displacement
                    and tuple(vdv.momentum) in (momentum, negative)
                ),
                None,
            )
            if found is None:
                vdaggerv_lookup.append(
                    VdaggerVQuantumNumbers(
                        len(vdaggerv_lookup), momentum, qn.displacement
                    )
                )
                row.append((len(vdaggerv_lookup) - 1, False))
            else:
                dagger = (
                    momentum != (0, 0, 0)
                    and tuple(vdaggerv_lookup[found].momentum) == negative
                )
                row.append((found, dagger))
        vdv_indices.append(row)
    return vdv_indices


def create_rnd_vec_id(quarks, id_q1, id_q2, is_loop):
    """Random vector index pairs for a quark line from quark ``id_q1`` to ``id_q2``.

    Random vector indices run over all quarks in turn. For a loop only equal
    indices are paired; otherwise every pair of distinct indices is used, since
    equal random vectors would introduce a bias.
    """
    rndq1_start = sum(q.number_of_rnd_vec for q in quarks[:id_q1])
    rndq2_start = sum(q.number_of_rnd_vec for q in quarks[:id_q2])
    n1 = quarks[id_q1].number_of_rnd_vec
    n2 = quarks[id_q2].number_of_rnd_vec

    if n1 < 1 or n2 < 1 or (id_q1 == id_q2 and n1 < 2):
        raise LookupError_(
            "There are not enough random vectors for charged correlators"
        )

    q1_range = range(rndq1_start, rndq1_start + n1)
    q2_range = range(rndq2_start, rndq2_start + n2)
    if is_loop:
        return [(i, i) for i in q1_range]
    return [(i, j) for i in q1_range for j in q2_range if i != j]


def build_hdf5_dataset_name(corr_type, quark_types, quantum_numbers):
    """Dataset name from diagram type, quark flavours and operator quantum numbers."""
    name = corr_type + "_" + "".join(quark_types)
    for qn in quantum_numbers:
        name += "_p" + momentum_to_string(qn.momentum)
        name += ".d" + displacement_to_string(qn.displacement)
        name += ".g" + gamma_to_string(qn.gamma)
    return name


def _build_quarkline_lookup_one_qn(
    operator_id, quantum_numbers, vdv_indices, rnd_vec_ids, ql_lookup, ql_lookup_ids
):
    qn = quantum_numbers[operator_id]
    id_vdaggerv, need_daggering = vdv_indices[operator_id]
    candidate = DilutedFactorIndex(
        id_vdaggerv, need_daggering, list(qn.gamma), list(rnd_vec_ids)
    )
    ql_lookup_ids[operator_id] = unique_push_back(ql_lookup, candidate)


class TraceRequestFactory:
    """Makes trace requests for one trace of a diagram."""

    def __init__(self, name, vertices, locations):
        self._name = name
        self._vertices = list(vertices)
        self._locations = list(locations)

    def make(self, tr_lookup, ql_ids):
        """Register the quark line ids of this trace in ``tr_lookup``; return a request."""
        ql_ids_for_trace = [ql_ids[vertex] for vertex in self._vertices]
        tr_id = unique_push_back(tr_lookup, ql_ids_for_trace)
        return TraceRequest(self._name, tr_id, list(self._locations))

    def name(self):
        return self._name

    def __repr__(self):
        return (
            f"TraceRequestFactory(name={self._name!r}, vertices={self._vertices!r})"
        )


def get_locations(spec, vertices):
    """Whether each vertex is a source or a sink vertex of the diagram."""
    source_vertices, sink_vertices = spec.vertices
    locations = []
    for vertex in vertices:
        if vertex in source_vertices:
            locations.append(Location.SOURCE)
        elif vertex in sink_vertices:
            locations.append(Location.SINK)
        else:
            raise LookupError_(
                "The vertex was not found in the list, this needs to be fixed by a "
                "developer."
            )
    return locations


def make_trace_request_factories(spec):
    """One factory per trace of the diagram, after checking the traces are closed."""
    factories = []
    for trace in spec.traces:
        if not trace:
            raise LookupError_("A trace of the diagram holds no quark lines.")
        name = "tr"
        vertices = []
        previous_q2 = -1
        for ql in trace:
            name += ql.name
            vertices.append(ql.q1)
            if previous_q2 >= 0 and ql.q1 != previous_q2:
                raise LookupError_(
                    "Inconsistency in quark line definitions of the diagrams. This is "
                    "not a user error but needs to be fixed by a developer."
                )
            previous_q2 = ql.q2

        if vertices[0] != trace[-1].q2:
            raise LookupError_(
                "This trace does not end with the vertex that it started with. This "
                "inconsistency needs to be fixed by a developer."
            )

        factories.append(
            TraceRequestFactory(name, vertices, get_locations(spec, vertices))
        )
    return factories


def init_lookup_tables(gd, diagram_specs):
    """Fill the lookup tables of ``gd`` from its correlators, operators and quarks.

    ``diagram_specs`` maps a diagram type such as ``C20`` to its ``DiagramSpec``.
    """
    for correlator in gd.correlator_list:
        try:
            spec = diagram_specs[correlator.type]
        except KeyError:
            raise LookupError_(f"Unknown diagram type {correlator.type!r}.") from None

        quantum_numbers = build_quantum_numbers_from_correlator_list(
            correlator, gd.operator_list, gd.momentum_cutoff, spec
        )
        quark_types = [gd.quarks[qid].type for qid in correlator.quark_numbers]
        vdv_indices = build_vdaggerv_lookup(
            quantum_numbers, gd.operator_lookuptable.vdaggerv_lookup
        )

        ql_ids = [0] * sum(len(trace) for trace in spec.traces)

        for qn_vec, vdv_row in zip(quantum_numbers, vdv_indices):
            for trace_spec in spec.traces:
                for ql in trace_spec:
                    ric_ids = create_rnd_vec_id(
                        gd.quarks,
                        correlator.quark_numbers[ql.q1],
                        correlator.quark_numbers[ql.q2],
                        ql.is_loop(),
                    )
                    _build_quarkline_lookup_one_qn(
                        ql.q2,
                        qn_vec,
                        vdv_row,
                        ric_ids,
                        gd.quarkline_lookuptable.setdefault(ql.name, []),
                        ql_ids,
                    )

            dataset_name = build_hdf5_dataset_name(correlator.type, quark_types, qn_vec)

            factories = make_trace_request_factories(spec)
            if not factories:
                raise LookupError_("The diagram must be expressed as traces.")

            request = CorrelatorRequest([], dataset_name)
            for factory in factories:
                request.trace_requests.append(
                    factory.make(
                        gd.trace_indices_map.setdefault(factory.name(), []), ql_ids
                    )
                )
            unique_push_back(
                gd.correlator_requests_map.setdefault(correlator.type, []), request
            )

    lookup = gd.operator_lookuptable
    lookup.index_of_unity = -1
    for vdv in lookup.vdaggerv_lookup:
        if tuple(vdv.momentum) == (0, 0, 0) and not vdv.displacement:
            lookup.index_of_unity = vdv.id

    if any(vdv.displacement for vdv in lookup.vdaggerv_lookup):
        lookup.need_gaugefield = True