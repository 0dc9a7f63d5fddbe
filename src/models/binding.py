"""
Property Binding - one animated (target, property) pair
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from interpolation.base import ManagedType
    from properties.accessor import PropertyAccessor


@dataclass(frozen=True)
class PropertyBinding:
    """
    Immutable record of one property being transitioned

    Only the target's live property value changes while a transition runs;
    start_value, end_value and interpolator are fixed at creation.

    Attributes:
        target: Object owning the property (not owned by the binding)
        accessor: Resolved once in Transition.add(), reused every tick
        start_value: Independent copy of the property value at binding time
        end_value: Destination value (not copied)
        interpolator: ManagedType selected for the value's type
    """
    target: Any
    accessor: 'PropertyAccessor'
    start_value: Any
    end_value: Any
    interpolator: 'ManagedType'

    @property
    def property_name(self) -> str:
        return self.accessor.name

    def value_at(self, progress: float) -> Any:
        return self.interpolator.value_at(self.start_value, self.end_value, progress)
