import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fractal_maze.core.bitlist import BitList

class TestBitList(unittest.TestCase):
    def test_initialization(self):
        bits = BitList(70)
        self.assertEqual(len(bits), 70)
        self.assertFalse(any(bits))

        bits = BitList(70, True)
        self.assertTrue(all(bits))
        self.assertEqual(len(list(bits)), 70)

    def test_empty_and_negative(self):
        self.assertEqual(len(BitList(0)), 0)
        self.assertEqual(list(BitList(0, True)), [])
        with self.assertRaises(ValueError):
            BitList(-1)

    def test_set_across_words(self):
        bits = BitList(130)
        for i in (0, 63, 64, 129):
            bits[i] = True
        self.assertEqual([i for i, v in enumerate(bits) if v], [0, 63, 64, 129])

        bits[64] = False
        self.assertFalse(bits[64])
        self.assertTrue(bits[63])

    def test_range_checks(self):
        bits = BitList(10)
        with self.assertRaises(IndexError):
            bits[10]
        with self.assertRaises(IndexError):
            bits[-1]
        with self.assertRaises(IndexError):
            bits[10] = True

    def test_clear(self):
        bits = BitList(100, True)
        bits.clear()
        self.assertFalse(any(bits))
        self.assertEqual(len(bits), 100)

    def test_find(self):
        bits = BitList(130, True)
        self.assertEqual(bits.find(False), -1)
        self.assertEqual(bits.find(True), 0)
        bits[100] = False
        self.assertEqual(bits.find(False), 100)
        self.assertIn(False, bits)

        sparse = BitList(70)
        self.assertEqual(sparse.find(True), -1)
        self.assertNotIn(True, sparse)
        sparse[65] = True
        self.assertEqual(sparse.find(True), 65)

    def test_copy_is_independent(self):
        bits = BitList(20, True)
        other = bits.copy()
        self.assertEqual(bits, other)
        other[5] = False
        self.assertTrue(bits[5])
        self.assertNotEqual(bits, other)

    def test_from_words(self):
        # Bits past the count are dropped
        bits = BitList.from_words(3, [0xFF])
        self.assertEqual(list(bits), [True, True, True])
        self.assertEqual(bits, BitList(3, True))

        with self.assertRaises(ValueError):
            BitList.from_words(65, [0])

if __name__ == '__main__':
    unittest.main()
