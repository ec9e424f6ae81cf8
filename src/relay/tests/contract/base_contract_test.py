# ABOUTME: Base contract test framework for interface compliance verification
# ABOUTME: Provides common checks that implementations honor their abstract interface

import asyncio
import inspect
from abc import ABC, abstractmethod
from typing import Generic, List, Type, TypeVar

import pytest

# Generic type for interface classes
T = TypeVar("T", bound=ABC)


class ContractTestBase(Generic[T]):
    """
    Base class for contract tests that verify implementations comply with interface contracts.

    Subclasses name the interface and its concrete implementations; the
    inherited tests check abstractness, inheritance and method signatures.
    """

    @property
    @abstractmethod
    def interface_class(self) -> Type[T]:
        """The interface class being tested."""
        pass

    @property
    @abstractmethod
    def implementations(self) -> List[Type[T]]:
        """List of concrete implementations to test against the interface."""
        pass

    def get_abstract_methods(self) -> List[str]:
        """Get all abstract method names from the interface."""
        return [
            name
            for name, method in inspect.getmembers(self.interface_class, inspect.isfunction)
            if getattr(method, "__isabstractmethod__", False)
        ]

    @pytest.mark.contract
    def test_interface_is_abstract(self):
        """Verify that the interface class is properly abstract."""
        assert inspect.isabstract(self.interface_class), f"{self.interface_class.__name__} should be abstract"

    @pytest.mark.contract
    def test_implementations_inherit_from_interface(self):
        """Verify all implementations properly inherit from the interface."""
        for impl_class in self.implementations:
            assert issubclass(impl_class, self.interface_class), (
                f"{impl_class.__name__} must inherit from {self.interface_class.__name__}"
            )

    @pytest.mark.contract
    def test_implementations_are_concrete(self):
        """Verify all implementations are concrete (not abstract)."""
        for impl_class in self.implementations:
            assert not inspect.isabstract(impl_class), f"{impl_class.__name__} should be concrete, not abstract"

    @pytest.mark.contract
    def test_method_signatures_match(self):
        """Verify parameter names match between interface and implementations."""
        for impl_class in self.implementations:
            for method_name in self.get_abstract_methods():
                interface_sig = inspect.signature(getattr(self.interface_class, method_name))
                impl_sig = inspect.signature(getattr(impl_class, method_name))

                assert interface_sig.parameters.keys() == impl_sig.parameters.keys(), (
                    f"Parameter mismatch in {impl_class.__name__}.{method_name}"
                )

    @pytest.mark.contract
    def test_async_methods_stay_async(self):
        """Verify coroutine methods of the interface are coroutines in every implementation."""
        for name, method in inspect.getmembers(self.interface_class, inspect.isfunction):
            if not asyncio.iscoroutinefunction(method):
                continue
            for impl_class in self.implementations:
                assert asyncio.iscoroutinefunction(getattr(impl_class, name)), (
                    f"{impl_class.__name__}.{name} must be async"
                )
