"""Pillow renderer for the walkthrough screen.

The frame is a sticky control panel on top of a scrolling content column.
Content is laid out top to bottom into its own image, cropped at the
scroller's offset and pasted under the panel. While drawing, the renderer
records hit regions in screen coordinates so the window can turn clicks and
hovers into intents.
"""
from dataclasses import dataclass

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from animation.easing import ease_in_out_cubic, lerp
from visualization import colormap as cm
from visualization.scroll import SectionScroller
from visualization.view import WalkthroughView, VectorGlyph
from walkthrough.content import TRANSFORMER_BLOCK_TITLE, ATTENTION_HINT

PANEL_H = 200
MARGIN = 40
SECTION_GAP = 28

# Fixed section heights; attention collapses to 0 until it becomes visible
INPUT_H = 160
EMBEDDINGS_H = 230
POSITIONAL_H = 160
BLOCK_HEADER_H = 70
ATTENTION_H = 640
FEEDFORWARD_H = 250
OUTPUT_H = 250
INSIGHTS_H = 170
TITLE_H = 100

CELL = 46
CELL_GAP = 4


@dataclass
class HitRegion:
    box: tuple      # (x0, y0, x1, y1) in screen pixels
    intent: str     # 'toggle' | 'reset' | 'go_to' | 'select_head' | 'hover_cell'
    arg: object = None

    def contains(self, x: float, y: float) -> bool:
        x0, y0, x1, y1 = self.box
        return x0 <= x < x1 and y0 <= y < y1


def _font(size: int):
    return ImageFont.load_default(size=size)


def _wrap(draw, text: str, font, max_width: float) -> list:
    lines, line = [], ""
    for word in text.split():
        candidate = f"{line} {word}".strip()
        if line and draw.textlength(candidate, font=font) > max_width:
            lines.append(line)
            line = word
        else:
            line = candidate
    if line:
        lines.append(line)
    return lines


def _mix(a, b, t: float):
    return lerp(np.asarray(a, dtype=np.float32), np.asarray(b, dtype=np.float32), t)


class FrameRenderer:
    def __init__(self, width: int = 1280, height: int = 800,
                 scroller: SectionScroller = None):
        self.width = width
        self.height = height
        self.scroller = scroller or SectionScroller(self.viewport_height)
        self.hit_regions = []
        self.fonts = {
            'title': _font(30),
            'heading': _font(20),
            'body': _font(15),
            'small': _font(12),
            'mono': _font(16),
        }

    @property
    def viewport_height(self) -> int:
        return self.height - PANEL_H

    def hit_test(self, x: float, y: float):
        # Last drawn wins: panel regions are recorded after content
        for region in reversed(self.hit_regions):
            if region.contains(x, y):
                return region
        return None

    # ── Frame ───────────────────────────────────────────────────────

    def render(self, view: WalkthroughView, time: float = 0.0) -> Image.Image:
        self.hit_regions = []
        content_img = self._render_content(view)

        frame = Image.new('RGBA', (self.width, self.height), cm.to_rgba8(cm.BACKGROUND))
        top = int(round(self.scroller.offset))
        visible = content_img.crop((0, top, self.width, top + self.viewport_height))
        frame.alpha_composite(visible, dest=(0, PANEL_H))
        self._render_panel(frame, view, time)
        return frame.convert('RGB')

    # ── Control panel ───────────────────────────────────────────────

    def _render_panel(self, frame, view, time):
        draw = ImageDraw.Draw(frame, 'RGBA')
        f = self.fonts
        draw.rounded_rectangle((MARGIN // 2, 8, self.width - MARGIN // 2, PANEL_H - 8),
                               radius=16, fill=cm.to_rgba8(cm.PANEL))

        play_box = (MARGIN, 24, MARGIN + 200, 64)
        self._gradient_box(frame, play_box, (cm.rgb('#3b82f6'), cm.rgb('#8b5cf6')))
        if view.hovered == 'toggle':
            draw.rounded_rectangle(play_box, radius=10, outline=cm.to_rgba8(cm.TEXT), width=2)
        draw.text((play_box[0] + 100, 44), view.play_label, font=f['body'],
                  fill=cm.to_rgba8(cm.WHITE), anchor='mm')
        self.hit_regions.append(HitRegion(play_box, 'toggle'))

        reset_box = (MARGIN + 215, 24, MARGIN + 335, 64)
        reset_fill = cm.rgb('#4b5563') if view.hovered == 'reset' else cm.rgb('#6b7280')
        draw.rounded_rectangle(reset_box, radius=10, fill=cm.to_rgba8(reset_fill))
        draw.text((reset_box[0] + 60, 44), "Reset", font=f['body'],
                  fill=cm.to_rgba8(cm.WHITE), anchor='mm')
        self.hit_regions.append(HitRegion(reset_box, 'reset'))

        draw.text((self.width - MARGIN, 44), view.header, font=f['body'],
                  fill=cm.to_rgba8(cm.TEXT), anchor='rm')

        # Step indicators
        n = len(view.indicators)
        gap = 8
        span = self.width - 2 * MARGIN
        bar_w = (span - gap * (n - 1)) / n
        pulse = 0.5 + 0.5 * ease_in_out_cubic(0.5 + 0.5 * np.sin(time * 3.0))
        for ind in view.indicators:
            x0 = MARGIN + ind.id * (bar_w + gap)
            box = (int(x0), 84, int(x0 + bar_w), 96)
            if ind.filled:
                self._gradient_box(frame, box, (cm.rgb('#60a5fa'), cm.rgb('#c084fc')), radius=6)
            else:
                draw.rounded_rectangle(box, radius=6, fill=cm.to_rgba8(cm.rgb('#d1d5db')))
            if ind.current:
                ring = (box[0] - 4, box[1] - 4, box[2] + 4, box[3] + 4)
                draw.rounded_rectangle(ring, radius=9, width=3,
                                       outline=cm.to_rgba8(cm.rgb('#d8b4fe', pulse)))
            self.hit_regions.append(HitRegion((box[0], box[1] - 6, box[2], box[3] + 6),
                                              'go_to', ind.id))

        desc_box = (MARGIN, 112, self.width - MARGIN, PANEL_H - 20)
        draw.rounded_rectangle(desc_box, radius=10, fill=cm.to_rgba8(cm.rgb('#eff6ff')),
                               outline=cm.to_rgba8(cm.rgb('#bfdbfe')))
        y = desc_box[1] + 14
        for line in _wrap(draw, view.description, f['body'], desc_box[2] - desc_box[0] - 32):
            draw.text((desc_box[0] + 16, y), line, font=f['body'], fill=cm.to_rgba8(cm.TEXT))
            y += 20

    # ── Content column ──────────────────────────────────────────────

    def _layout(self, view):
        """Section tops in content coordinates, and total content height."""
        tops = {}
        y = TITLE_H
        for key, h in (('input', INPUT_H), ('embeddings', EMBEDDINGS_H),
                       ('positional', POSITIONAL_H)):
            tops[key] = (y, h)
            y += h + SECTION_GAP
        tops['block'] = (y, 0)
        y += BLOCK_HEADER_H
        if view.attention.visible:
            tops['attention'] = (y, ATTENTION_H)
            y += ATTENTION_H + SECTION_GAP
        tops['feedforward'] = (y, FEEDFORWARD_H)
        y += FEEDFORWARD_H + SECTION_GAP
        block_top = tops['block'][0]
        tops['block'] = (block_top, y - block_top)
        y += SECTION_GAP
        tops['output'] = (y, OUTPUT_H)
        y += OUTPUT_H + SECTION_GAP
        tops['insights'] = (y, INSIGHTS_H)
        y += INSIGHTS_H + SECTION_GAP
        return tops, y

    def layout(self, view):
        """Register the section anchors of `view` with the scroller."""
        tops, total = self._layout(view)
        self.scroller.sections.clear()
        for key in view.sections:
            if key in tops:
                self.scroller.register(key, *tops[key])
        self.scroller.set_content_height(total)
        self.scroller.flush_pending()
        return tops, total

    def _render_content(self, view):
        tops, total = self.layout(view)
        self._screen_dy = PANEL_H - int(round(self.scroller.offset))

        img = Image.new('RGBA', (self.width, int(total)), cm.to_rgba8(cm.BACKGROUND))
        draw = ImageDraw.Draw(img, 'RGBA')
        f = self.fonts

        draw.text((self.width // 2, 36), view.title, font=f['title'],
                  fill=cm.to_rgba8(cm.rgb('#7c3aed')), anchor='mm')
        draw.text((self.width // 2, 72), view.subtitle, font=f['body'],
                  fill=cm.to_rgba8(cm.TEXT_MUTED), anchor='mm')

        self._draw_input(img, draw, view, tops['input'])
        self._draw_embeddings(img, draw, view, tops['embeddings'])
        self._draw_positional(img, draw, view, tops['positional'])
        self._draw_block(img, draw, view, tops)
        self._draw_output(img, draw, view, tops['output'])
        self._draw_insights(draw, view, tops['insights'])
        return img

    def _section_box(self, draw, key, view, top, height, x0=MARGIN, x1=None):
        x1 = x1 if x1 is not None else self.width - MARGIN
        sec = view.sections[key]
        accent = cm.SECTION_ACCENTS[key]
        fill = _mix(cm.PANEL, accent, 0.06) if sec.active else cm.PANEL
        outline = accent if sec.active else cm.rgb('#d1d5db')
        draw.rounded_rectangle((x0, top, x1, top + height), radius=18,
                               fill=cm.to_rgba8(fill), outline=cm.to_rgba8(outline),
                               width=3)
        title_color = _mix(accent, cm.BLACK, 0.3) if sec.active else cm.TEXT
        draw.text((x0 + 24, top + 18), sec.title, font=self.fonts['heading'],
                  fill=cm.to_rgba8(title_color))
        if sec.caption:
            draw.text((x0 + 24, top + height - 30), sec.caption, font=self.fonts['small'],
                      fill=cm.to_rgba8(cm.TEXT_MUTED))
        return sec.active

    def _draw_input(self, img, draw, view, slot):
        top, height = slot
        active = self._section_box(draw, 'input', view, top, height)
        accent = cm.SECTION_ACCENTS['input']
        x = MARGIN + 24
        for chip in view.tokens:
            t = chip.reveal if active else 0.0
            w = draw.textlength(chip.text, font=self.fonts['mono']) + 32
            y = top + 64 - 4 * t
            fill = _mix(cm.INACTIVE, accent, t)
            draw.rounded_rectangle((x, y, x + w, y + 38), radius=10, fill=cm.to_rgba8(fill))
            text_color = _mix(cm.TEXT, cm.WHITE, t)
            draw.text((x + w / 2, y + 19), chip.text, font=self.fonts['mono'],
                      fill=cm.to_rgba8(text_color), anchor='mm')
            x += w + 12

    def _draw_vector(self, img, draw, x, y, glyph: VectorGlyph, bar_w=56, bar_h=10, gap=4):
        """Column of bars; returns the glyph height."""
        for i, scale in enumerate(glyph.scales):
            by = int(y + i * (bar_h + gap))
            if glyph.highlighted:
                w = max(int(bar_w * scale), 1)
                bx = max(int(x + (bar_w - w) / 2), 0)
                strip = Image.fromarray(cm.gradient_image_array(w, bar_h, alpha=0.9))
                img.alpha_composite(strip, dest=(bx, by))
            else:
                draw.rounded_rectangle((x, by, x + bar_w, by + bar_h), radius=3,
                                       fill=cm.to_rgba8(cm.INACTIVE_BAR))
        h = len(glyph.scales) * (bar_h + gap)
        if glyph.label:
            color = cm.rgb('#2563eb') if glyph.highlighted else cm.TEXT_MUTED
            draw.text((x + bar_w / 2, y + h + 10), glyph.label, font=self.fonts['small'],
                      fill=cm.to_rgba8(color), anchor='mm')
        return h

    def _draw_embeddings(self, img, draw, view, slot):
        top, height = slot
        active = self._section_box(draw, 'embeddings', view, top, height)
        accent = cm.SECTION_ACCENTS['embeddings']
        col_w = (self.width - 2 * MARGIN - 48) / max(len(view.embeddings), 1)
        for i, (token, glyph) in enumerate(view.embeddings):
            x = MARGIN + 24 + i * col_w
            card = (x, top + 56, x + col_w - 16, top + height - 40)
            draw.rounded_rectangle(card, radius=12,
                                   fill=cm.to_rgba8(cm.PANEL if active else cm.rgb('#f9fafb')))
            mid = (card[1] + card[3]) / 2
            draw.text((x + 20, mid), token, font=self.fonts['mono'],
                      fill=cm.to_rgba8(cm.TEXT), anchor='lm')
            draw.text((x + 90, mid), "->", font=self.fonts['mono'],
                      fill=cm.to_rgba8(accent if active else cm.TEXT_MUTED), anchor='lm')
            self._draw_vector(img, draw, x + 130, card[1] + 10, glyph)

    def _draw_positional(self, img, draw, view, slot):
        top, height = slot
        active = self._section_box(draw, 'positional', view, top, height)
        accent = cm.SECTION_ACCENTS['positional']
        x = MARGIN + 24
        for label, dy in view.positions:
            w = draw.textlength(label, font=self.fonts['mono']) + 28
            y = top + 64 + dy
            fill = accent if active else cm.INACTIVE
            draw.rounded_rectangle((x, y, x + w, y + 36), radius=10, fill=cm.to_rgba8(fill))
            draw.text((x + w / 2, y + 18), label, font=self.fonts['mono'],
                      fill=cm.to_rgba8(cm.WHITE if active else cm.TEXT), anchor='mm')
            x += w + 10
        draw.text((x + 16, top + 82), "-> Added to embeddings", font=self.fonts['body'],
                  fill=cm.to_rgba8(cm.TEXT if active else cm.TEXT_MUTED), anchor='lm')

    def _draw_block(self, img, draw, view, tops):
        top, height = tops['block']
        accent = cm.SECTION_ACCENTS['attention']
        outline = accent if view.block_active else cm.rgb('#9ca3af')
        draw.rounded_rectangle((MARGIN - 10, top, self.width - MARGIN + 10, top + height),
                               radius=24, outline=cm.to_rgba8(outline), width=4,
                               fill=cm.to_rgba8(_mix(cm.PANEL, accent, 0.04)))
        draw.text((self.width // 2, top + 36), TRANSFORMER_BLOCK_TITLE,
                  font=self.fonts['heading'],
                  fill=cm.to_rgba8(accent if view.block_active else cm.TEXT), anchor='mm')
        if 'attention' in tops:
            self._draw_attention(img, draw, view, tops['attention'])
        self._draw_feedforward(img, draw, view, tops['feedforward'])

    def _draw_attention(self, img, draw, view, slot):
        top, height = slot
        panel = view.attention
        self._section_box(draw, 'attention', view, top, height)
        f = self.fonts

        # Head selector
        x = MARGIN + 24
        for h in range(panel.num_heads):
            box = (x, top + 56, x + 76, top + 88)
            selected = h == panel.selected_head
            fill = cm.rgb('#a855f7') if selected else cm.INACTIVE
            draw.rounded_rectangle(box, radius=8, fill=cm.to_rgba8(fill))
            draw.text((x + 38, top + 72), f"Head {h + 1}", font=f['small'],
                      fill=cm.to_rgba8(cm.WHITE if selected else cm.TEXT), anchor='mm')
            self._add_content_hit(box, 'select_head', h)
            x += 84

        # Q / K / V cards
        card_w = (self.width - 2 * MARGIN - 48 - 2 * 20) / 3
        for idx, card in enumerate(panel.cards):
            cx = MARGIN + 24 + idx * (card_w + 20)
            box = (cx, top + 104, cx + card_w, top + 260)
            accent = cm.QKV_ACCENTS[card.accent]
            fill = _mix(cm.PANEL, accent, 0.15 * card.emphasis)
            draw.rounded_rectangle(box, radius=12, fill=cm.to_rgba8(fill))
            draw.text((cx + 16, top + 118), card.name, font=f['body'],
                      fill=cm.to_rgba8(_mix(accent, cm.BLACK, 0.3)))
            glyph = VectorGlyph(cm.bar_scales(6), card.highlighted)
            self._draw_vector(img, draw, cx + 16, top + 146, glyph)
            draw.text((cx + 16, top + 236), card.question, font=f['small'],
                      fill=cm.to_rgba8(cm.TEXT_MUTED))

        # Attention matrix
        draw.text((MARGIN + 24, top + 280),
                  f"Attention Pattern Visualization (Head {panel.selected_head + 1})",
                  font=f['body'], fill=cm.to_rgba8(cm.TEXT))
        gx0 = MARGIN + 110
        gy0 = top + 330
        pitch = CELL + CELL_GAP
        for j, tok in enumerate(panel.tokens):
            draw.text((gx0 + j * pitch + CELL / 2, gy0 - 14), tok, font=f['small'],
                      fill=cm.to_rgba8(cm.TEXT_MUTED), anchor='mm')
        for i, tok in enumerate(panel.tokens):
            draw.text((gx0 - 10, gy0 + i * pitch + CELL / 2), tok, font=f['small'],
                      fill=cm.to_rgba8(cm.TEXT_MUTED), anchor='rm')

        colors = cm.attention_cell_colors(panel.scores, panel.active)
        text_colors = cm.attention_text_colors(panel.scores)
        for cell in panel.cells:
            grow = 4 if cell.hovered else 0
            x0 = gx0 + cell.col * pitch - grow
            y0 = gy0 + cell.row * pitch - grow
            box = (x0, y0, x0 + CELL + 2 * grow, y0 + CELL + 2 * grow)
            draw.rounded_rectangle(box, radius=8, fill=cm.to_rgba8(colors[cell.row, cell.col]))
            if cell.hovered:
                draw.rounded_rectangle(box, radius=8, width=2,
                                       outline=cm.to_rgba8(cm.rgb('#8b5cf6', 0.6)))
            draw.text((x0 + CELL / 2 + grow, y0 + CELL / 2 + grow), cell.label, font=f['small'],
                      fill=cm.to_rgba8(text_colors[cell.row, cell.col]), anchor='mm')
            self._add_content_hit((x0 + grow, y0 + grow, x0 + grow + CELL, y0 + grow + CELL),
                                  'hover_cell', (cell.row, cell.col))

        side_x = gx0 + len(panel.tokens) * pitch + 40
        if panel.tooltip:
            draw.text((side_x, gy0 + 10), panel.tooltip, font=f['body'],
                      fill=cm.to_rgba8(cm.rgb('#6d28d9')))
        for k, line in enumerate(_wrap(draw, ATTENTION_HINT, f['small'],
                                       self.width - MARGIN - 24 - side_x)):
            draw.text((side_x, gy0 + 60 + k * 18), line, font=f['small'],
                      fill=cm.to_rgba8(cm.TEXT_MUTED))

    def _draw_feedforward(self, img, draw, view, slot):
        top, height = slot
        active = self._section_box(draw, 'feedforward', view, top, height)
        accent = cm.SECTION_ACCENTS['feedforward']
        cx = self.width // 2
        self._draw_vector(img, draw, cx - 260, top + 64, view.ffn_glyphs[0])
        self._draw_vector(img, draw, cx + 204, top + 64, view.ffn_glyphs[1])
        box = (cx - 120, top + 92, cx + 120, top + 136)
        draw.rounded_rectangle(box, radius=12,
                               fill=cm.to_rgba8(accent if active else cm.rgb('#d1d5db')))
        draw.text((cx, top + 114), view.ffn_label, font=self.fonts['body'],
                  fill=cm.to_rgba8(cm.WHITE if active else cm.TEXT_MUTED), anchor='mm')
        draw.text((cx, top + 152), view.ffn_expansion, font=self.fonts['small'],
                  fill=cm.to_rgba8(accent if active else cm.TEXT_MUTED), anchor='mm')

    def _draw_output(self, img, draw, view, slot):
        top, height = slot
        active = self._section_box(draw, 'output', view, top, height)
        accent = cm.SECTION_ACCENTS['output']
        x = MARGIN + 120
        glyph = VectorGlyph(cm.bar_scales(8), active, "Final hidden state")
        self._draw_vector(img, draw, x, top + 64, glyph)
        draw.text((x + 110, top + 120), "->", font=self.fonts['heading'],
                  fill=cm.to_rgba8(accent if active else cm.TEXT_MUTED), anchor='mm')
        for i, pred in enumerate(view.predictions):
            col, row = i % 2, i // 2
            bx = x + 170 + col * 170
            by = top + 64 + row * 46
            if pred.highlight:
                fill, text = accent, cm.WHITE
            elif active:
                fill, text = cm.INACTIVE, cm.TEXT
            else:
                fill, text = cm.rgb('#f3f4f6'), cm.rgb('#9ca3af')
            draw.rounded_rectangle((bx, by, bx + 156, by + 36), radius=8, fill=cm.to_rgba8(fill))
            draw.text((bx + 78, by + 18), pred.text, font=self.fonts['body'],
                      fill=cm.to_rgba8(text), anchor='mm')

    def _draw_insights(self, draw, view, slot):
        top, height = slot
        n = len(view.insights)
        gap = 20
        w = (self.width - 2 * MARGIN - gap * (n - 1)) / n
        accents = (cm.rgb('#dbeafe'), cm.rgb('#dcfce7'), cm.rgb('#f3e8ff'))
        for k, (title, body) in enumerate(view.insights):
            x0 = MARGIN + k * (w + gap)
            draw.rounded_rectangle((x0, top, x0 + w, top + height), radius=16,
                                   fill=cm.to_rgba8(accents[k % len(accents)]))
            draw.text((x0 + 20, top + 18), title, font=self.fonts['heading'],
                      fill=cm.to_rgba8(cm.TEXT))
            y = top + 52
            for line in _wrap(draw, body, self.fonts['small'], w - 40):
                draw.text((x0 + 20, y), line, font=self.fonts['small'],
                          fill=cm.to_rgba8(cm.TEXT_MUTED))
                y += 17

    # ── Helpers ─────────────────────────────────────────────────────

    def _gradient_box(self, img, box, stops, radius=10):
        x0, y0, x1, y1 = (int(v) for v in box)
        w, h = max(x1 - x0, 1), max(y1 - y0, 1)
        fill = Image.fromarray(cm.gradient_image_array(w, h, stops))
        mask = Image.new('L', (w, h), 0)
        ImageDraw.Draw(mask).rounded_rectangle((0, 0, w - 1, h - 1), radius=radius, fill=255)
        img.paste(fill, (x0, y0), mask)

    def _add_content_hit(self, box, intent, arg=None):
        """Record a content-space box as a screen hit region if it is on screen."""
        x0, y0, x1, y1 = box
        sy0, sy1 = y0 + self._screen_dy, y1 + self._screen_dy
        if sy1 <= PANEL_H or sy0 >= self.height:
            return
        self.hit_regions.append(HitRegion((x0, max(sy0, PANEL_H), x1, sy1), intent, arg))
