"""Call stack operations."""

import jax.numpy as jnp
from flax.struct import dataclass

from nibble8.errors import StackUnderflowError


@dataclass(frozen=True)
class StackState:
    """Growable stack of return addresses, most recent last."""
    data: tuple = ()

    def __len__(self) -> int:
        return len(self.data)


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack.

    The address is stored as given. A CALL fetched from the last word of
    memory returns past the end, where the next fetch faults.
    """
    return stack.replace(data=stack.data + (int(address),))


def pop(stack: StackState) -> tuple[StackState, int]:
    """Pop address from stack."""
    if not stack.data:
        raise StackUnderflowError("RET with an empty call stack")
    return stack.replace(data=stack.data[:-1]), stack.data[-1]
