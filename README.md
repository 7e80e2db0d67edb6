# denselinalg

Dense linear algebra on NumPy arrays: eigenvalue and QR decompositions,
operator and vector norms, linear least squares, online orthogonalization
of Krylov bases with Arnoldi iteration, and the LOBPCG eigensolver with
truncated eigenvalue and singular value decompositions built on it.

The package depends on NumPy and SciPy. Its tests use pytest, which the
`test` extra installs.

## Modules

- `denselinalg.qr`: `qr` (reduced QR) and `qr_square`, plus the `UPLO` enum
  (`UPLO.Upper`, `UPLO.Lower`) that selects a triangle.
- `denselinalg.eig`: `eig`, `eigg` (the generalized problem `a v = w b v`)
  and `eigvals` for general square matrices; results are always complex.
- `denselinalg.eigh`: `eigh`, `eigh_generalized`, `eigvalsh` and `ssqrt`
  (symmetric square root) for Hermitian matrices; only the triangle named
  by `uplo` is read.
- `denselinalg.norm`: the vector norms `norm`, `norm_l1`, `norm_l2` and
  `norm_max`, and `normalize`, which scales rows or columns
  (`NormalizeAxis.Row`, `NormalizeAxis.Column`) to unit length and returns
  the norms it divided out.
- `denselinalg.opnorm`: the operator norms `opnorm`, `opnorm_one`,
  `opnorm_inf` and `opnorm_fro`, and `opnorm_tridiagonal` for a matrix given
  by its three diagonals; `NormType` selects the norm.
- `denselinalg.least_squares`: `least_squares` and `least_squares_in_place`,
  both returning a `LeastSquaresResult` with `solution`, `singular_values`,
  `rank` and `residual_sum_of_squares`.
- `denselinalg.inner`: `inner`, the dot product that conjugates its left
  argument.
- `denselinalg.generate`: random matrices (`random`, `random_unitary`,
  `random_regular`, `random_hermite`, `random_hpd`, each taking an optional
  `dtype` and NumPy `rng`) and the helpers `conjugate`, `from_diag`,
  `hstack` and `vstack`.
- `denselinalg.layout`: `layout`, `square_layout`, `ensure_square` and
  `as_allocated`, which describe an array's storage as a `MatrixLayout`.
- `denselinalg.operator`: `LinearOperator`, a base class that applies an
  action to vectors and to the columns of matrices, and `MatrixOperator`,
  a dense matrix used as one.
- `denselinalg.krylov.base`: the `Orthogonalizer` base class,
  `AppendResult`, the `Strategy` enum and the online QR function `qr`.
- `denselinalg.krylov.mgs` and `denselinalg.krylov.householder`: the
  orthogonalizers `MGS` and `Householder` with the online QR shortcuts
  `mgs` and `householder`; the latter module also has `calc_reflector` and
  `reflect`.
- `denselinalg.krylov.arnoldi`: `Arnoldi`, an iterator yielding the columns
  of the Hessenberg matrix, and `arnoldi_mgs` and `arnoldi_householder`,
  which run it to completion and return `(Q, H)`.
- `denselinalg.lobpcg.lobpcg`: `lobpcg` itself, the `Order` enum
  (`Order.Largest`, `Order.Smallest`), `LobpcgResult`, and the helpers
  `sorted_eig`, `mask_columns`, `apply_constraints` and `orthonormalize`.
- `denselinalg.lobpcg.truncated_eig`: `TruncatedEig`.
- `denselinalg.lobpcg.truncated_svd`: `TruncatedSvd` and
  `TruncatedSvdResult`.

## Errors

Failures of the linear algebra itself raise subclasses of
`denselinalg.error.LinalgError`: `NotSquareError`, `IncompatibleShapeError`,
`InvalidStrideError`, `MemoryNotContiguousError`, `NotStandardShapeError`
and `LapackError`. Arguments of the wrong kind, such as a vector passed
where a matrix is needed, raise `ValueError` or `TypeError`.

## Examples

### Least squares

```python
import numpy as np
from denselinalg.least_squares import least_squares

a = np.array([[1., 1., 1.], [2., 3., 4.], [3., 5., 2.], [4., 2., 5.], [5., 4., 3.]])
b = np.array([-10., 12., 14., 16., 18.])
result = least_squares(a, b)
print(result.solution)  # approximately [2, 1, 1]
print(result.rank, result.singular_values, result.residual_sum_of_squares)
```

### Building an orthonormal basis online

```python
import numpy as np
from denselinalg.krylov.mgs import MGS

ortho = MGS(3, 1e-9)
print(ortho.append(np.array([0.0, 1.0, 0.0])).coefficients)  # [1.]
print(ortho.append(np.array([1.0, 1.0, 0.0])).coefficients)  # [1. 1.]
result = ortho.append(np.array([1.0, 2.0, 0.0]))
print(result.dependent, result.coefficients)  # True [2. 1. 0.]
```

### A few extreme eigenvalues

```python
from itertools import islice

import numpy as np
from denselinalg.lobpcg.lobpcg import Order
from denselinalg.lobpcg.truncated_eig import TruncatedEig

a = np.diag(np.arange(1.0, 21.0))
solver = TruncatedEig(a, Order.Largest).precision(1e-5).maxiter(500)
for values, vectors in islice(solver, 3):
    print(values)  # about 20, then 19, then 18
```

### A truncated singular value decomposition

```python
import numpy as np
from denselinalg.lobpcg.lobpcg import Order
from denselinalg.lobpcg.truncated_svd import TruncatedSvd

a = np.array([[3., 2., 2.], [2., 3., -2.]])
u, sigma, vt = TruncatedSvd(a, Order.Largest).maxiter(10).decompose(2).values_vectors()
print(sigma)  # approximately [5, 3]
```

## What it does not do

The package is a library only; it has no command-line tool. It has no
solvers for general, triangular, Hermitian or tridiagonal linear systems,
no matrix inverse, no Cholesky or LU factorization routines of its own, no
full singular value decomposition and no trace or determinant; for those,
use NumPy and SciPy directly.