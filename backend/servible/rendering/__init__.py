from .paths import get_path, set_path
from .registry import BLOCK_REGISTRY, BlockType, get_block_type
from .renderer import render_block, render_blocks, render_page
