"""Parameterizations consumed by ``Linear``.

A parameterization fixes, for one family of terms, how an object (a tuple of
generators, a pack, a tuple of parts) is compressed into a hashable key, how it
is ordered for Lyndon-word purposes, and how its weight and dimension are
measured. ``Linear`` itself never inspects objects directly.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Hashable, Sequence, override
from symbolax.formatting import TENSOR_PROD, UNITY, str_join
from symbolax.linear.keys import PackedCodec, check_capacity


class LinearParam(ABC):
    """Abstract per-family policy for ``Linear`` combinations."""

    # When set, every inserted key goes through ``canonicalize_key``.
    needs_canonicalization: bool = False

    @abstractmethod
    def object_to_key(self, obj: Any) -> Hashable:
        raise NotImplementedError

    @abstractmethod
    def key_to_object(self, key: Hashable) -> Any:
        raise NotImplementedError

    @abstractmethod
    def object_to_string(self, obj: Any) -> str:
        raise NotImplementedError

    def object_is_nil(self, obj: Any) -> bool:
        """Whether ``obj`` contains a nil generator and therefore denotes zero."""
        return False

    def canonicalize_key(self, key: Hashable) -> tuple[Hashable, int]:
        """Returns the canonical representative of ``key`` and the sign relating them.

        A sign of ``0`` means the term vanishes.
        """
        return key, 1

    def object_to_weight(self, obj: Any) -> int:
        raise TypeError(f"{self} does not define weight.")

    def key_to_weight(self, key: Hashable) -> int:
        return self.object_to_weight(self.key_to_object(key))

    def object_to_dimension(self, obj: Any) -> int:
        raise TypeError(f"{self} does not define dimension.")

    def key_to_vector(self, key: Hashable) -> tuple[Hashable, ...]:
        """Letters of the term as a word, for Lyndon and shuffle machinery."""
        raise TypeError(f"Vector form is not defined for {self}.")

    def vector_to_key(self, vector: Sequence[Hashable]) -> Hashable:
        raise TypeError(f"Vector form is not defined for {self}.")

    def monom_tensor_product(self, lhs: Hashable, rhs: Hashable) -> Hashable:
        raise TypeError(f"Tensor product is not defined for {self}.")

    def check_compatible(self, keys: Sequence[Hashable]) -> None:
        """Raises if the terms cannot be combined into one tensor or co-expression term."""

    def lyndon_letter_key(self, letter: Hashable) -> Any:
        """Sort key of a single letter under this family's Lyndon order."""
        return letter

    def __str__(self) -> str:
        return f"{self.__class__.__name__}"


class PackedVectorParam(LinearParam):
    """Terms are tuples of generators with small positive integer codes.

    Keys are ``PackedCodec`` buffers, so letters of the vector form are the codes
    themselves and the default Lyndon order is the code order.
    """

    codec: PackedCodec

    @abstractmethod
    def generator_to_code(self, generator: Any) -> int:
        raise NotImplementedError

    @abstractmethod
    def code_to_generator(self, code: int) -> Any:
        raise NotImplementedError

    def generator_is_nil(self, generator: Any) -> bool:
        return generator.is_nil()

    def generator_to_string(self, generator: Any) -> str:
        return str(generator)

    @override
    def object_to_key(self, obj: Sequence[Any]) -> bytes:
        return self.codec.pack([self.generator_to_code(g) for g in obj])

    @override
    def key_to_object(self, key: bytes) -> tuple[Any, ...]:
        return tuple(self.code_to_generator(c) for c in self.codec.unpack(key))

    @override
    def object_to_string(self, obj: Sequence[Any]) -> str:
        if not obj:
            return UNITY
        return TENSOR_PROD.join(self.generator_to_string(g) for g in obj)

    @override
    def object_is_nil(self, obj: Sequence[Any]) -> bool:
        return any(self.generator_is_nil(g) for g in obj)

    @override
    def object_to_weight(self, obj: Sequence[Any]) -> int:
        return len(obj)

    @override
    def key_to_weight(self, key: bytes) -> int:
        return self.codec.length(key)

    @override
    def key_to_vector(self, key: bytes) -> tuple[int, ...]:
        return self.codec.unpack(key)

    @override
    def vector_to_key(self, vector: Sequence[int]) -> bytes:
        return self.codec.pack(vector)

    @override
    def monom_tensor_product(self, lhs: bytes, rhs: bytes) -> bytes:
        return self.codec.concat(lhs, rhs)


class TupleVectorParam(LinearParam):
    """Terms are tuples of generators whose keys are arbitrary orderable values.

    Used where a generator cannot be squeezed into a single integer (e.g. a
    compound ratio); capacity is still enforced on every key.
    """

    capacity: int

    @abstractmethod
    def generator_to_key(self, generator: Any) -> Hashable:
        raise NotImplementedError

    @abstractmethod
    def key_to_generator(self, key: Hashable) -> Any:
        raise NotImplementedError

    def generator_is_nil(self, generator: Any) -> bool:
        return generator.is_nil()

    @override
    def object_to_key(self, obj: Sequence[Any]) -> tuple[Hashable, ...]:
        key = tuple(self.generator_to_key(g) for g in obj)
        check_capacity(key, self.capacity)
        return key

    @override
    def key_to_object(self, key: tuple[Hashable, ...]) -> tuple[Any, ...]:
        return tuple(self.key_to_generator(k) for k in key)

    @override
    def object_to_string(self, obj: Sequence[Any]) -> str:
        return str_join(obj, TENSOR_PROD) if obj else UNITY

    @override
    def object_is_nil(self, obj: Sequence[Any]) -> bool:
        return any(self.generator_is_nil(g) for g in obj)

    @override
    def object_to_weight(self, obj: Sequence[Any]) -> int:
        return len(obj)

    @override
    def key_to_weight(self, key: tuple[Hashable, ...]) -> int:
        return len(key)

    @override
    def key_to_vector(self, key: tuple[Hashable, ...]) -> tuple[Hashable, ...]:
        return key

    @override
    def vector_to_key(self, vector: Sequence[Hashable]) -> tuple[Hashable, ...]:
        key = tuple(vector)
        check_capacity(key, self.capacity)
        return key

    @override
    def monom_tensor_product(
        self, lhs: tuple[Hashable, ...], rhs: tuple[Hashable, ...]
    ) -> tuple[Hashable, ...]:
        return self.vector_to_key(lhs + rhs)


class FormalSymbol(ABC):
    """An opaque object standing in for a term with no further tensor decomposition."""

    @property
    @abstractmethod
    def total_weight(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def to_key(self) -> Hashable:
        raise NotImplementedError


_PRODUCT_TAG = 0
_FORMAL_TAG = 1


class PackParam(LinearParam):
    """Terms are packs: either a product of generators or a formal symbol.

    Keys are ``(0, product_key)`` or ``(1, formal_key)``; the product arm is
    delegated to ``product_param``. Operations that need product form fail with
    ``TypeError`` on a formal symbol.
    """

    product_param: LinearParam
    formal_type: type[FormalSymbol]

    @abstractmethod
    def key_to_formal_symbol(self, key: Hashable) -> FormalSymbol:
        raise NotImplementedError

    def _split_key(self, key: tuple[int, Hashable]) -> tuple[int, Hashable]:
        tag, payload = key
        if tag not in (_PRODUCT_TAG, _FORMAL_TAG):
            raise ValueError(f"Unexpected pack tag {tag} in key {key}.")
        return tag, payload

    @override
    def object_to_key(self, obj: Any) -> tuple[int, Hashable]:
        if isinstance(obj, tuple):
            return (_PRODUCT_TAG, self.product_param.object_to_key(obj))
        if isinstance(obj, self.formal_type):
            return (_FORMAL_TAG, obj.to_key())
        raise TypeError(f"{self} cannot store {obj!r}.")

    @override
    def key_to_object(self, key: tuple[int, Hashable]) -> Any:
        tag, payload = self._split_key(key)
        if tag == _PRODUCT_TAG:
            return self.product_param.key_to_object(payload)
        return self.key_to_formal_symbol(payload)

    @override
    def object_to_string(self, obj: Any) -> str:
        if isinstance(obj, tuple):
            return self.product_param.object_to_string(obj)
        if isinstance(obj, self.formal_type):
            return str(obj)
        raise TypeError(f"{self} cannot render {obj!r}.")

    @override
    def object_is_nil(self, obj: Any) -> bool:
        if isinstance(obj, tuple):
            return self.product_param.object_is_nil(obj)
        return False

    @override
    def object_to_weight(self, obj: Any) -> int:
        if isinstance(obj, tuple):
            return len(obj)
        if isinstance(obj, self.formal_type):
            return obj.total_weight
        raise TypeError(f"{self} cannot measure {obj!r}.")

    @override
    def key_to_weight(self, key: tuple[int, Hashable]) -> int:
        tag, payload = self._split_key(key)
        if tag == _PRODUCT_TAG:
            return self.product_param.key_to_weight(payload)
        return self.key_to_formal_symbol(payload).total_weight

    def is_product_key(self, key: tuple[int, Hashable]) -> bool:
        return self._split_key(key)[0] == _PRODUCT_TAG

    @override
    def key_to_vector(self, key: tuple[int, Hashable]) -> tuple[Hashable, ...]:
        tag, payload = self._split_key(key)
        if tag != _PRODUCT_TAG:
            raise TypeError(f"Vector form is not defined for formal symbols: {key}.")
        return self.product_param.key_to_vector(payload)

    @override
    def vector_to_key(self, vector: Sequence[Hashable]) -> tuple[int, Hashable]:
        return (_PRODUCT_TAG, self.product_param.vector_to_key(vector))

    @override
    def monom_tensor_product(
        self, lhs: tuple[int, Hashable], rhs: tuple[int, Hashable]
    ) -> tuple[int, Hashable]:
        if not (self.is_product_key(lhs) and self.is_product_key(rhs)):
            raise TypeError("Tensor product for formal symbols is not defined.")
        return (_PRODUCT_TAG, self.product_param.monom_tensor_product(lhs[1], rhs[1]))

    @override
    def lyndon_letter_key(self, letter: Hashable) -> Any:
        return self.product_param.lyndon_letter_key(letter)
