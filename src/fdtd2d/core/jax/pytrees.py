from typing import Any, Self

import pytreeclass as tc
from pytreeclass._src.tree_base import TreeClassIndexer


class ExtendedTreeClassIndexer(TreeClassIndexer):
    """Extended indexer for tree class that preserves type information.

    Extends TreeClassIndexer to properly handle type hints and return Self type.
    """

    def __getitem__(self, where: Any) -> Self:
        """Gets item at specified index while preserving type information.

        Args:
            where: Index or key to access

        Returns:
            Self: The indexed item with proper type information preserved
        """
        return super().__getitem__(where)  # type: ignore


class TreeClass(tc.TreeClass):
    """Tree class with non-recursive attribute replacement.

    All containers of the simulation (field state, coefficient maps, boundary
    objects, configuration) derive from this class. Instances are immutable,
    updates return a modified copy.
    """

    @property
    def at(self) -> ExtendedTreeClassIndexer:
        """Gets the extended indexer for this tree.

        Returns:
            ExtendedTreeClassIndexer: Indexer that preserves type information
        """
        return super().at  # type: ignore

    def _aset(
        self,
        attr_name: str,
        val: Any,
    ):
        setattr(self, attr_name, val)

    def aset(
        self,
        attr_name: str,
        val: Any,
    ) -> Self:
        """Sets an attribute directly without recursive application.

        Similar to Self.at[attr_name].set(val), but without recursively
        applying to each tree leaf. Instead, replaces the full attribute
        with the new value.

        Args:
            attr_name: Name of attribute to set
            val: Value to set the attribute to

        Returns:
            Self: Updated instance with new attribute value
        """
        _, self = self.at["_aset"](attr_name, val)
        return self


autoinit = tc.autoinit


def field(**kwargs: Any) -> Any:
    """Creates a regular pytreeclass field whose value is a pytree leaf.

    Args:
        **kwargs: Forwarded to pytreeclass.field (default, init, repr, kind, ...)

    Returns:
        A pytreeclass Field instance
    """
    return tc.field(**kwargs)


def frozen_field(**kwargs: Any) -> Any:
    """Creates a field that automatically freezes on set and unfreezes on get.

    Frozen values are not traced by JAX, which makes them usable as static
    python values (shapes, indices, flags) inside jitted functions.

    Args:
        **kwargs: Forwarded to pytreeclass.field. Additional on_setattr and
            on_getattr callbacks are applied after freezing / after unfreezing.

    Returns:
        A pytreeclass Field instance configured with freeze/unfreeze behavior
    """
    on_setattr = list(kwargs.pop("on_setattr", ())) + [tc.freeze]
    on_getattr = [tc.unfreeze] + list(kwargs.pop("on_getattr", ()))
    return tc.field(on_setattr=on_setattr, on_getattr=on_getattr, **kwargs)

