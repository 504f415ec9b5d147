"""
Tests for the sample channel.
"""

import threading
import unittest

from td_lib.tasks import Channel, ChannelClosed


class TestChannel(unittest.TestCase):
    """Test cases for Channel."""

    def test_fifo(self):
        """Test that items come out in the order they went in."""
        channel = Channel()
        for i in range(10):
            channel.send(i)

        self.assertEqual(len(channel), 10)
        self.assertEqual([channel.receive() for _ in range(10)], list(range(10)))

    def test_close_drains_then_raises(self):
        """Test that buffered items survive close and then receive fails."""
        channel = Channel()
        channel.send("a")
        channel.send("b")
        channel.close()

        self.assertTrue(channel.closed)
        self.assertEqual(channel.receive(), "a")
        self.assertEqual(list(channel), ["b"])
        with self.assertRaises(ChannelClosed):
            channel.receive()

    def test_send_after_close(self):
        """Test that sending on a closed channel fails."""
        channel = Channel()
        channel.close()
        channel.close()

        with self.assertRaises(ChannelClosed):
            channel.send(1)

    def test_negative_capacity(self):
        """Test that a negative capacity is rejected."""
        with self.assertRaises(ValueError):
            Channel(-1)

    def test_close_wakes_receiver(self):
        """Test that a receiver blocked on an empty channel sees the close."""
        channel = Channel()
        outcome = []

        def receiver():
            try:
                channel.receive()
            except ChannelClosed:
                outcome.append("closed")

        t = threading.Thread(target=receiver)
        t.start()
        t.join(0.05)
        self.assertTrue(t.is_alive())

        channel.close()
        t.join(5)

        self.assertEqual(outcome, ["closed"])

    def test_bounded_blocks_sender(self):
        """Test that a full bounded channel holds the sender back."""
        channel = Channel(capacity=2)
        channel.send(1)
        channel.send(2)

        t = threading.Thread(target=channel.send, args=(3,))
        t.start()
        t.join(0.05)
        self.assertTrue(t.is_alive())

        self.assertEqual(channel.receive(), 1)
        t.join(5)

        self.assertFalse(t.is_alive())
        self.assertEqual([channel.receive(), channel.receive()], [2, 3])

    def test_close_wakes_blocked_sender(self):
        """Test that a sender blocked on a full channel fails on close."""
        channel = Channel(capacity=1)
        channel.send(1)
        outcome = []

        def sender():
            try:
                channel.send(2)
            except ChannelClosed:
                outcome.append("closed")

        t = threading.Thread(target=sender)
        t.start()
        t.join(0.05)

        channel.close()
        t.join(5)

        self.assertEqual(outcome, ["closed"])

    def test_rendezvous(self):
        """Test that with capacity 0 send waits until the item is received."""
        channel = Channel(capacity=0)
        delivered = threading.Event()

        def sender():
            channel.send("x")
            delivered.set()

        t = threading.Thread(target=sender)
        t.start()

        self.assertFalse(delivered.wait(0.05))
        self.assertEqual(channel.receive(), "x")
        self.assertTrue(delivered.wait(5))
        t.join(5)

    def test_rendezvous_close_withdraws_pending_item(self):
        """Test that a rendezvous send failing on close does not deliver its item."""
        channel = Channel(capacity=0)
        outcome = []

        def sender():
            try:
                channel.send("x")
                outcome.append("sent")
            except ChannelClosed:
                outcome.append("closed")

        t = threading.Thread(target=sender)
        t.start()
        t.join(0.2)
        self.assertTrue(t.is_alive())

        channel.close()
        t.join(5)

        self.assertEqual(outcome, ["closed"])
        self.assertEqual(len(channel), 0)
        with self.assertRaises(ChannelClosed):
            channel.receive()

    def test_producer_order_preserved_across_threads(self):
        """Test that one producer's items arrive in order."""
        channel = Channel(capacity=4)

        def producer():
            for i in range(200):
                channel.send(i)
            channel.close()

        t = threading.Thread(target=producer)
        t.start()
        received = list(channel)
        t.join(5)

        self.assertEqual(received, list(range(200)))


if __name__ == '__main__':
    unittest.main()
