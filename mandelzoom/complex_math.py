"""
Complex number value type used by the camera and input handling.

Python's builtin complex would work for the arithmetic, but the camera
code reads more clearly with named real/imag fields and a value that
refuses mutation. The JIT kernels in compute.py never see this class;
they take the real and imaginary parts as plain floats.
"""


class Complex:
    """
    Immutable pair of doubles (real, imag).

    Supports a + b, a - b, -a, a * b (complex product) and scalar
    multiplication from either side.
    """

    __slots__ = ('real', 'imag')

    def __init__(self, real=0.0, imag=0.0):
        object.__setattr__(self, 'real', float(real))
        object.__setattr__(self, 'imag', float(imag))

    def __setattr__(self, name, value):
        raise AttributeError("Complex is immutable")

    @classmethod
    def from_builtin(cls, value):
        """Build from a Python complex (or anything with .real/.imag)."""
        return cls(value.real, value.imag)

    def to_builtin(self):
        return complex(self.real, self.imag)

    def __add__(self, other):
        if not isinstance(other, Complex):
            return NotImplemented
        return Complex(self.real + other.real, self.imag + other.imag)

    def __sub__(self, other):
        if not isinstance(other, Complex):
            return NotImplemented
        return Complex(self.real - other.real, self.imag - other.imag)

    def __neg__(self):
        return Complex(-self.real, -self.imag)

    def __mul__(self, other):
        if isinstance(other, Complex):
            return Complex(
                self.real * other.real - self.imag * other.imag,
                self.real * other.imag + self.imag * other.real
            )
        if isinstance(other, (int, float)):
            return Complex(self.real * other, self.imag * other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, (int, float)):
            return Complex(other * self.real, other * self.imag)
        return NotImplemented

    def __iter__(self):
        # Allows: re, im = point
        yield self.real
        yield self.imag

    def __eq__(self, other):
        if not isinstance(other, Complex):
            return NotImplemented
        return self.real == other.real and self.imag == other.imag

    def __hash__(self):
        return hash((self.real, self.imag))

    def __repr__(self):
        return f"Complex({self.real!r}, {self.imag!r})"


ZERO = Complex(0.0, 0.0)
