"""CHIP-8 system instructions (0x0xxx)."""

from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.display import clear
from chip8vm.stack import pop
from chip8vm.instructions.dispatch import make_dispatcher, low_nibble


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=clear(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=address)


# Selected by the low nibble only, so e.g. 0x0120 also clears the screen
execute_system_instruction = make_dispatcher(
    {
        0x0: execute_clear_screen,
        0xE: execute_return,
    },
    low_nibble,
    16,
)
