"""
CSS Shapes Studio - Code Generator Service

Turns an ordered shape list into the CSS and HTML text users copy out of the
editor. Pure functions: no clock, no randomness, no hidden state, so the same
shapes always give byte-identical output.

Block layout per shape (z-order, 1-based class index):

    .shape-1 {
      position: absolute;
      left: 10px;
      ...
    }

Text shapes use .text-N, everything else .shape-N.
"""

import html
import re
from typing import List, Sequence, Tuple

from constants import (
    DEFAULT_FONT_SIZE, DEFAULT_FONT_FAMILY, DEFAULT_TEXT,
    DEFAULT_COMPOSITION_NAME, EXPORT_MARGIN,
    EMPTY_CSS_PLACEHOLDER, EMPTY_HTML_PLACEHOLDER,
)
from models.geometry import (
    format_number, js_round, clip_path_for, border_radius_for, bounding_box,
)

INDENT = '  '

# text-align -> justify-content for the flex box that centres text vertically
JUSTIFY_FOR_ALIGN = {
    'center': 'center',
    'right': 'flex-end',
}


def class_name_for(shape, index: int) -> str:
    """CSS class of the shape at z-order position index (0-based)"""
    prefix = 'text' if shape.is_text else 'shape'
    return f'{prefix}-{index + 1}'


def container_class_for(name: str) -> str:
    """Container class from a composition name ('My Logo' -> 'my-logo-container')"""
    slug = re.sub(r'\s+', '-', (name or DEFAULT_COMPOSITION_NAME).strip().lower())
    return f'{slug or DEFAULT_COMPOSITION_NAME}-container'


def _text_rules(shape) -> List[str]:
    text_align = shape.text_align or 'left'
    rules = [
        f'color: {shape.color};',
        f'font-size: {format_number(shape.font_size or DEFAULT_FONT_SIZE)}px;',
        f'font-family: {shape.font_family or DEFAULT_FONT_FAMILY};',
    ]
    if shape.font_weight and shape.font_weight != 'normal':
        rules.append(f'font-weight: {shape.font_weight};')
    if shape.font_style and shape.font_style != 'normal':
        rules.append(f'font-style: {shape.font_style};')
    rules.extend([
        f'text-align: {text_align};',
        'display: flex;',
        'align-items: center;',
        f'justify-content: {JUSTIFY_FOR_ALIGN.get(text_align, "flex-start")};',
        'overflow: hidden;',
        'white-space: pre-wrap;',
        'word-break: break-word;',
    ])
    return rules


def _outline_rules(shape) -> List[str]:
    rules = [f'background: {shape.color};']
    # clip-path and border-radius never appear together
    clip_path = clip_path_for(shape)
    if clip_path is not None:
        rules.append(f'clip-path: {clip_path};')
    else:
        border_radius = border_radius_for(shape)
        if border_radius is not None:
            rules.append(f'border-radius: {border_radius};')
    return rules


def transform_for(shape) -> str:
    """transform value, rotation first then flips; empty string when identity"""
    transforms = []
    if shape.rotation:
        transforms.append(f'rotate({format_number(shape.rotation)}deg)')
    if shape.flip_x:
        transforms.append('scaleX(-1)')
    if shape.flip_y:
        transforms.append('scaleY(-1)')
    return ' '.join(transforms)


def shape_css_block(shape, index: int) -> str:
    """CSS rule block for one shape, without a trailing newline"""
    rules = [
        'position: absolute;',
        f'left: {js_round(shape.x)}px;',
        f'top: {js_round(shape.y)}px;',
        f'width: {js_round(shape.width)}px;',
        f'height: {js_round(shape.height)}px;',
    ]

    if shape.is_text:
        rules.extend(_text_rules(shape))
    else:
        rules.extend(_outline_rules(shape))

    transform = transform_for(shape)
    if transform:
        rules.append(f'transform: {transform};')

    if shape.opacity is not None and shape.opacity != 100:
        rules.append(f'opacity: {format_number(shape.opacity / 100)};')

    lines = [f'.{class_name_for(shape, index)} {{']
    lines.extend(INDENT + rule for rule in rules)
    lines.append('}')
    return '\n'.join(lines)


def generate_css(shapes: Sequence) -> str:
    """CSS for every shape in z-order, blocks separated by a blank line"""
    if not shapes:
        return EMPTY_CSS_PLACEHOLDER
    return '\n\n'.join(shape_css_block(shape, index) for index, shape in enumerate(shapes))


def generate_html(shapes: Sequence, name: str = DEFAULT_COMPOSITION_NAME) -> str:
    """HTML container sized to the composition plus EXPORT_MARGIN, one div per shape"""
    if not shapes:
        return EMPTY_HTML_PLACEHOLDER

    _, _, max_x, max_y = bounding_box(shapes)
    width = js_round(max_x + EXPORT_MARGIN)
    height = js_round(max_y + EXPORT_MARGIN)

    lines = [
        f'<div class="{container_class_for(name)}" '
        f'style="position: relative; width: {width}px; height: {height}px;">'
    ]
    for index, shape in enumerate(shapes):
        class_name = class_name_for(shape, index)
        if shape.is_text:
            content = html.escape(shape.text or DEFAULT_TEXT, quote=False)
            lines.append(f'{INDENT}<div class="{class_name}">{content}</div>')
        else:
            lines.append(f'{INDENT}<div class="{class_name}"></div>')
    lines.append('</div>')
    return '\n'.join(lines)


def generate_code(shapes: Sequence, name: str = DEFAULT_COMPOSITION_NAME) -> Tuple[str, str]:
    """(css, html) for the shapes"""
    return generate_css(shapes), generate_html(shapes, name)
