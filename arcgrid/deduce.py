"""Deduce how training outputs factor into outer products of two images."""

from __future__ import annotations

from math import log
from typing import Callable, Iterable, Sequence

from arcgrid import core
from arcgrid.image import Image, Point, bad_image
from arcgrid.transforms import outer_product_is, outer_product_si

ImagePair = tuple[Image, Image]

_WORST = 1e9


def _bad_pair() -> ImagePair:
    return bad_image(), bad_image()


def _block(img: Image, ii: int, jj: int, w: int, h: int) -> list[int]:
    return [img[ii * h + i, jj * w + j] for i in range(h) for j in range(w)]


def _merge(small: Image, block: list[int]) -> bool:
    """Write block into small; False if it disagrees with a cell already set."""
    for k, value in enumerate(block):
        current = small.mask[k]
        if current != -1 and current != value:
            return False
        small.mask[k] = value
    return True


def inverse_outer_product_si(img: Image, w: int, h: int) -> ImagePair:
    """Split img into a 0/1 layout image and a w x h tile, or two bad images."""
    if img.area() <= 0 or img.w % w or img.h % h:
        return _bad_pair()
    big = core.full(Point(img.w // w, img.h // h), -1)
    small = core.full(Point(w, h), -1)
    for ii in range(big.h):
        for jj in range(big.w):
            block = _block(img, ii, jj, w, h)
            nonzero = any(block)
            big[ii, jj] = int(nonzero)
            if nonzero and not _merge(small, block):
                return _bad_pair()
    return big, small


def inverse_outer_product_is(img: Image, w: int, h: int) -> ImagePair:
    """Split img into a colour layout image and a 0/1 w x h tile, or two bad images."""
    if img.area() <= 0 or img.w % w or img.h % h:
        return _bad_pair()
    big = core.full(Point(img.w // w, img.h // h), -1)
    small = core.full(Point(w, h), -1)
    for ii in range(big.h):
        for jj in range(big.w):
            block = _block(img, ii, jj, w, h)
            mask = 0
            for c in block:
                mask |= 1 << c
            if bin(mask & ~1).count("1") > 1:
                return _bad_pair()
            colour = mask.bit_length() - 1
            big[ii, jj] = colour
            if colour and not _merge(small, [int(c > 0) for c in block]):
                return _bad_pair()
    return big, small


_INVERSES: dict[int, Callable[[Image, int, int], ImagePair]] = {
    0: inverse_outer_product_is,
    1: inverse_outer_product_si,
}


def _colour_mask(img: Image) -> int:
    # Unset cells hold -1; they land on the top bit of a 32-bit mask.
    mask = 0
    for c in img.mask:
        mask |= 1 << (c & 31)
    return mask


def _score(pairs: Sequence[ImagePair]) -> float:
    """Description length of a factorisation; lower is simpler."""
    if any(img.area() <= 0 for pair in pairs for img in pair):
        return _WORST
    total = 0.0
    for side in (0, 1):
        imgs = [pair[side] for pair in pairs]
        if len(imgs) > 1 and all(img == imgs[0] for img in imgs):
            continue
        for img in imgs:
            cols = bin(_colour_mask(img) & ~1).count("1")
            if cols <= 1 and core.is_rectangle(img):
                total += log(img.w + 1) + log(img.h + 1)
            elif cols <= 1:
                total += log(2) * img.w * img.h
            else:
                total += log(10) * img.w * img.h
    return total


class OuterProductDeduction:
    """The simplest outer-product factorisation shared by all training outputs."""

    def __init__(self, train: Iterable[ImagePair]) -> None:
        outs = [out for _, out in train]
        if not outs:
            raise ValueError("no training pairs to deduce from")
        self.rec_funci = -1
        self.train_targets: list[ImagePair] = []
        best_score = _WORST

        minw = min(out.w for out in outs)
        minh = min(out.h for out in outs)
        for h in range(1, minh + 1):
            for w in range(1, minw + 1):
                for scaled in (False, True):
                    for k in (0, 1):
                        f = _INVERSES[k]
                        targets = [
                            f(out, out.w // w, out.h // h) if scaled else f(out, w, h)
                            for out in outs
                        ]
                        entropy = _score(targets)
                        if entropy < best_score:
                            best_score = entropy
                            self.rec_funci = k
                            self.train_targets = targets

        for k in (0, 1):
            f = _INVERSES[k]
            best_single: list[ImagePair] = []
            for out in outs:
                best_at, chosen = _WORST, _bad_pair()
                for h in range(1, out.h + 1):
                    for w in range(1, out.w + 1):
                        pair = f(out, w, h)
                        entropy = _score([pair])
                        if entropy < best_at:
                            best_at, chosen = entropy, pair
                best_single.append(chosen)
            entropy = _score(best_single)
            if entropy < best_score:
                best_score = entropy
                self.rec_funci = k
                self.train_targets = best_single

        if self.rec_funci == -1:
            raise ValueError("training outputs admit no outer-product factorisation")
        for (a, b), out in zip(self.train_targets, outs):
            if self.reconstruct(a, b) != out:
                raise ValueError("factorisation does not reproduce a training output")

    def reconstruct(self, a: Image, b: Image) -> Image:
        """Rebuild an image from its two factors."""
        f = outer_product_si if self.rec_funci else outer_product_is
        return f(a, b)