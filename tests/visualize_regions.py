#!/usr/bin/env python3
"""
Visual test for region clamping.

Displays a grid with one cell per edge-case request. Each cell shows the
source image inside a padded frame, the requested region (red) which may
reach outside the image, the clamped region (green), and the extracted
crop on the right.

Usage:
    python tests/visualize_regions.py
    python tests/visualize_regions.py --save output.png
"""

import argparse
import sys
from pathlib import Path

import cv2
import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent))

from transforms import (
    AbsoluteSize, AnchoredRegion, OutOfBoundsError, Positions, Region,
    extract_region, resolve_region,
)


# ── Requests ─────────────────────────────────────────────────────────────────
REQUESTS = [
    ("Inside", Region(40, 30, 160, 120)),
    ("Beyond origin", Region(-80, -60, 240, 200)),
    ("Too big", Region(160, 120, 300, 300)),
    ("Covers all", Region(-40, -40, 400, 320)),
    ("Anchored center", AnchoredRegion(Positions.CENTER, AbsoluteSize(400, 100))),
    ("No overlap", Region(340, 0, 50, 50)),
]

# ── Layout constants ─────────────────────────────────────────────────────────
SRC_W, SRC_H = 320, 240  # synthetic source size
PAD = 90                 # frame around the source so outside parts show
CROP_BOX = 200           # square area for the extracted crop
LABEL_H = 30
INFO_H = 60
GAP = 20
MARGIN = 24
TITLE_H = 56
COLS = 2

FRAME_W = SRC_W + PAD * 2
FRAME_H = SRC_H + PAD * 2
CELL_W = FRAME_W + CROP_BOX + GAP
CELL_H = LABEL_H + FRAME_H + INFO_H

BG = (30, 30, 30)
REQUEST_COLOR = (60, 80, 255)   # BGR red-orange
CLAMP_COLOR = (80, 220, 120)    # BGR green
TEXT_WHITE = (240, 240, 240)
TEXT_DIM = (160, 160, 160)


def make_source():
    """Quadrant pattern with a diagonal so crops are easy to place by eye."""
    img = np.zeros((SRC_H, SRC_W, 3), dtype=np.uint8)
    hw, hh = SRC_W // 2, SRC_H // 2
    for color, (x, y) in [
        ((255, 200, 0), (0, 0)), ((0, 0, 200), (hw, 0)),
        ((0, 200, 0), (0, hh)), ((200, 0, 200), (hw, hh)),
    ]:
        cv2.rectangle(img, (x, y), (x + hw, y + hh), color, -1)
    cv2.line(img, (0, 0), (SRC_W, SRC_H), (255, 255, 255), 3)
    return img


def put_text(canvas, text, org, scale=0.45, color=TEXT_WHITE, thickness=1):
    cv2.putText(canvas, text, org, cv2.FONT_HERSHEY_SIMPLEX,
                scale, color, thickness, cv2.LINE_AA)


def draw_rect(frame, region, color, fill=False):
    """Draw a region given in source coordinates onto the padded frame."""
    p1 = (region.x + PAD, region.y + PAD)
    p2 = (region.x + region.width + PAD - 1, region.y + region.height + PAD - 1)
    if fill:
        overlay = frame.copy()
        cv2.rectangle(overlay, p1, p2, color, -1)
        cv2.addWeighted(overlay, 0.25, frame, 0.75, 0, frame)
    cv2.rectangle(frame, p1, p2, color, 2, cv2.LINE_AA)


def draw_cell(canvas, x0, y0, label, request, source):
    cv2.rectangle(canvas, (x0, y0), (x0 + CELL_W, y0 + CELL_H), (48, 48, 48), -1)
    put_text(canvas, label, (x0 + 8, y0 + 21), scale=0.55)

    frame = np.full((FRAME_H, FRAME_W, 3), 40, dtype=np.uint8)
    frame[PAD:PAD + SRC_H, PAD:PAD + SRC_W] = (source * 0.65).astype(np.uint8)

    located = request
    if isinstance(request, AnchoredRegion):
        located = request.locate(SRC_W, SRC_H)
    draw_rect(frame, located, REQUEST_COLOR)

    info_y = y0 + LABEL_H + FRAME_H + 18
    put_text(canvas, f"requested x={located.x} y={located.y} "
             f"w={located.width} h={located.height}",
             (x0 + 8, info_y), scale=0.40, color=TEXT_DIM)

    try:
        clamped = resolve_region(request, SRC_W, SRC_H)
    except OutOfBoundsError as e:
        put_text(canvas, str(e)[:60], (x0 + 8, info_y + 18), scale=0.38,
                 color=REQUEST_COLOR)
    else:
        draw_rect(frame, clamped, CLAMP_COLOR, fill=True)
        color = CLAMP_COLOR if clamped.was_clamped else TEXT_DIM
        put_text(canvas, f"clamped   x={clamped.x} y={clamped.y} "
                 f"w={clamped.width} h={clamped.height}",
                 (x0 + 8, info_y + 18), scale=0.40, color=color)

        crop = extract_region(source, clamped)
        scale = min(CROP_BOX / crop.shape[1], CROP_BOX / crop.shape[0])
        thumb = cv2.resize(crop, (max(1, int(crop.shape[1] * scale)),
                                  max(1, int(crop.shape[0] * scale))),
                           interpolation=cv2.INTER_NEAREST)
        cx = x0 + FRAME_W + GAP
        cy = y0 + LABEL_H + (FRAME_H - thumb.shape[0]) // 2
        canvas[cy:cy + thumb.shape[0], cx:cx + thumb.shape[1]] = thumb

    # Source outline
    cv2.rectangle(frame, (PAD, PAD), (PAD + SRC_W - 1, PAD + SRC_H - 1),
                  (200, 200, 200), 1)
    canvas[y0 + LABEL_H:y0 + LABEL_H + FRAME_H, x0:x0 + FRAME_W] = frame


def build_visualization(source):
    rows = (len(REQUESTS) + COLS - 1) // COLS
    total_w = MARGIN * 2 + COLS * CELL_W + (COLS - 1) * GAP
    total_h = TITLE_H + MARGIN * 2 + rows * CELL_H + (rows - 1) * GAP

    canvas = np.full((total_h, total_w, 3), BG[0], dtype=np.uint8)
    cv2.rectangle(canvas, (0, 0), (total_w, TITLE_H), (45, 45, 45), -1)
    put_text(canvas, "REGION CLAMPING VISUALIZATION", (MARGIN, 36),
             scale=0.8, thickness=2)

    for idx, (label, request) in enumerate(REQUESTS):
        row, col = divmod(idx, COLS)
        x0 = MARGIN + col * (CELL_W + GAP)
        y0 = TITLE_H + MARGIN + row * (CELL_H + GAP)
        draw_cell(canvas, x0, y0, f"{idx + 1}. {label}", request, source)

    return canvas


def main():
    parser = argparse.ArgumentParser(
        description="Visualize region clamping for edge-case requests"
    )
    parser.add_argument('--save', type=str, default=None,
                        help='Save output to file instead of displaying')
    args = parser.parse_args()

    canvas = build_visualization(make_source())

    if args.save:
        cv2.imwrite(args.save, canvas)
        print(f"Saved to {args.save} ({canvas.shape[1]}x{canvas.shape[0]})")
    else:
        win = "Region Clamping Visualization"
        cv2.namedWindow(win, cv2.WINDOW_NORMAL)
        cv2.imshow(win, canvas)
        print("Press any key to close...")
        cv2.waitKey(0)
        cv2.destroyAllWindows()


if __name__ == "__main__":
    main()
