import unittest

import numpy as np

from tetris_engine.game import PIECE_COLORS, Piece, TetrominoType
from tetris_engine.game.pieces import ROTATIONS


class PieceTests(unittest.TestCase):
    def test_every_kind_has_four_four_cell_rotations(self):
        self.assertEqual(len(TetrominoType), 7)
        for kind in TetrominoType:
            masks = ROTATIONS[kind]
            self.assertEqual(len(masks), 4)
            for mask in masks:
                self.assertEqual(int(mask.sum()), 4)
                self.assertEqual(mask.shape, masks[0].shape)

    def test_masks_are_read_only(self):
        with self.assertRaises(ValueError):
            ROTATIONS[TetrominoType.T][0][0, 0] = 1

    def test_rotating_four_times_returns_to_start(self):
        piece = Piece(TetrominoType.L)
        turned = piece.rotated().rotated().rotated().rotated()
        self.assertEqual(turned, piece)
        self.assertEqual(piece.rotated().rotation, 1)

    def test_o_piece_is_rotation_invariant(self):
        masks = ROTATIONS[TetrominoType.O]
        for mask in masks[1:]:
            self.assertTrue(np.array_equal(mask, masks[0]))

    def test_vertical_i_occupies_third_column(self):
        piece = Piece(TetrominoType.I, rotation=1)
        self.assertEqual(piece.cells_at(0, 0), [(2, 0), (2, 1), (2, 2), (2, 3)])

    def test_cells_at_offsets_by_anchor(self):
        piece = Piece(TetrominoType.T)
        self.assertEqual(piece.cells_at(3, 5), [(4, 5), (3, 6), (4, 6), (5, 6)])

    def test_width_and_color(self):
        self.assertEqual(Piece(TetrominoType.I).width, 4)
        self.assertEqual(Piece(TetrominoType.O).width, 2)
        self.assertEqual(Piece(TetrominoType.S).width, 3)
        self.assertEqual(Piece(TetrominoType.Z).color, PIECE_COLORS[TetrominoType.Z])


if __name__ == "__main__":
    unittest.main()
