"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8vm.state import MachineState
from chip8vm.operations import Draw
from chip8vm.constants import DISPLAY_WIDTH, DISPLAY_HEIGHT, FLAG_REGISTER
from chip8vm.checks import check_index_range

# Pre-computed coordinate grids, shaped like the row-major framebuffer
yy, xx = jnp.meshgrid(jnp.arange(DISPLAY_HEIGHT), jnp.arange(DISPLAY_WIDTH), indexing='ij')


def execute_draw(state: MachineState, operation: Draw) -> MachineState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    The start position wraps around the screen, the sprite itself is clipped
    at the right and bottom edges. VF is set when any lit pixel is turned off.
    Only rows that land on screen are read from memory.
    """
    sprite_x = jnp.astype(state.V[operation.x], jnp.int32) % DISPLAY_WIDTH
    sprite_y = jnp.astype(state.V[operation.y], jnp.int32) % DISPLAY_HEIGHT

    if operation.n > 0:
        check_index_range(state, jnp.minimum(operation.n, DISPLAY_HEIGHT - sprite_y))

    row_offset = yy - sprite_y
    col_offset = xx - sprite_x
    in_sprite = (row_offset >= 0) & (row_offset < operation.n) & (col_offset >= 0) & (col_offset < 8)

    # Offsets outside the sprite are masked below, clip them to keep indices valid
    row_index = jnp.astype(state.I, jnp.int32) + jnp.clip(row_offset, 0, max(operation.n - 1, 0))
    sprite_bytes = jnp.astype(state.memory[row_index], jnp.int32)
    sprite = (sprite_bytes >> (7 - jnp.clip(col_offset, 0, 7))) & 1 & in_sprite

    screen = jnp.astype(state.display.reshape(DISPLAY_HEIGHT, DISPLAY_WIDTH), jnp.int32)
    collision = jnp.any((screen & sprite) != 0)

    return state.replace(
        display=jnp.astype(screen ^ sprite, jnp.uint8).reshape(-1),
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(collision, jnp.uint8))
    )


HANDLERS = {
    Draw: execute_draw,
}
