# slaphcontract

Building blocks for setting up correlation-function contractions in the
stochastic Laplacian Heaviside (sLapH) method of lattice QCD. The package
does the bookkeeping that comes before a contraction: it parses the quark,
operator and correlator definitions, checks the run parameters, and builds
the lookup tables of unique operators, quark lines, traces and correlator
requests.

## Modules

- `slaphcontract.kahan`: `KahanAccumulator` (compensated summation) and
  `NativeAccumulator` (plain summation) for real or complex numbers. Both
  offer `add`, `merge`, `value`, `+=` and `+`.
- `slaphcontract.cartesian`: `CartesianProduct`, which yields tuples of
  indices for a list of lookup-table lengths, the first index varying fastest.
- `slaphcontract.dilution`: `DilutionType` (`BLOCK`, `INTERLACE`),
  `DilutionScheme`, `DilutionIterator` and `BlockIterator` for walking the
  pairs of time-dilution blocks and the slice pairs within them.
- `slaphcontract.ranlxs`: the `Ranlxs` single-precision random number
  generator, with `get_state`, `reset` and `from_state`; bad levels, seeds
  or states raise `RanlxsError`.
- `slaphcontract.io_utils`: byte swapping and single/double precision
  conversion of binary data (`byte_swap`, `byte_swap_double`,
  `single2double`, `double2single`, ...).
- `slaphcontract.model`: data classes for quarks, quantum numbers,
  correlators, diagram specifications (`DiagramSpec`, `QuarklineSpec`),
  lookup entries, requests and the global run parameters (`GlobalData`).
- `slaphcontract.parsing`: `make_quark`, `quark_check`, `make_operator_list`
  and `make_correlator` for the strings of an input file; malformed input
  raises `ParseError`.
- `slaphcontract.input_handling`: `input_handling` checks the lattice,
  configuration range and eigenvector settings of a `GlobalData` and fills in
  its quarks, operators and correlators; problems raise `InputError`.
- `slaphcontract.lookup_tables`: `init_lookup_tables` builds the VdaggerV,
  quark-line and trace lookup tables and the correlator requests; problems
  raise `LookupError_`.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Examples

Summing with compensation:

```python
from slaphcontract.kahan import KahanAccumulator

acc = KahanAccumulator()
for x in (1.0, 1e-17, -1.0):
    acc += x
print(acc.value())
```

Iterating a time-dilution scheme:

```python
from slaphcontract.dilution import DilutionScheme, DilutionType

scheme = DilutionScheme(num_slice=8, block_size=2, dilution_type=DilutionType.BLOCK)
for block_pair in scheme:
    for slice_pair in block_pair:
        print(slice_pair.source(), slice_pair.sink(), slice_pair.qline_id())
```

Parsing an operator definition (all momenta with |p|^2 == 1):

```python
from slaphcontract.parsing import make_operator_list

operators = make_operator_list("g5.d0.p1")
print(len(operators))  # 6
```

Drawing random numbers reproducibly:

```python
from slaphcontract.ranlxs import Ranlxs

rng = Ranlxs(level=0, seed=1)
state = rng.get_state()
values = rng.random(4)
again = Ranlxs.from_state(state)
assert again.random(4) == values
```

Building lookup tables. The diagram specifications are passed in by the
caller:

```python
from slaphcontract.input_handling import build_quarks
from slaphcontract.lookup_tables import init_lookup_tables
from slaphcontract.model import DiagramSpec, GlobalData, QuarklineSpec
from slaphcontract.parsing import make_correlator, make_operator_list

gd = GlobalData(momentum_cutoff={0: 4})
gd.quarks = build_quarks(["u:4:TB:2:EI:6:DI:4:/data/peram"])
gd.operator_list = [make_operator_list("g5.d0.p0")]
gd.correlator_list = [make_correlator("C20:Q0:Q0:Op0:Op0")]

specs = {
    "C20": DiagramSpec(
        vertices=([0], [1]),
        traces=[[QuarklineSpec("Q1", 0, 1), QuarklineSpec("Q1", 1, 0)]],
    )
}
init_lookup_tables(gd, specs)
print(gd.correlator_requests_map["C20"][0].hdf5_dataset_name)
```

## What the package does not do

- It ships no table of diagram specifications; `init_lookup_tables` takes
  them as an argument.
- It does not read input files, gauge configurations, eigenvectors,
  perambulators or random vectors, and it computes no operators, traces or
  correlation functions.
- It writes no output files (HDF5 or otherwise) and has no command-line
  program.