import os
import unittest
from unittest.mock import MagicMock, patch

import psutil

from pumastats.StatCollector import StatCollector
from pumastats.Stats import StatsView


def fake_process(pid, num_threads, status=psutil.STATUS_RUNNING, children=None):
    process = MagicMock()
    process.pid = pid
    process.num_threads.return_value = num_threads
    process.status.return_value = status
    process.children.return_value = children or []
    return process


class TestCollectSingleProcess(unittest.TestCase):

    @patch("pumastats.StatCollector.psutil.Process")
    def test_no_children(self, process_cls):
        process_cls.return_value = fake_process(1, num_threads=4)
        snapshot = StatCollector(1).collect()
        self.assertEqual(snapshot, {"running": 4})
        process_cls.assert_called_once_with(1)

    @patch("pumastats.StatCollector.psutil.Process")
    def test_with_max_threads(self, process_cls):
        process_cls.return_value = fake_process(1, num_threads=4)
        snapshot = StatCollector(1, max_threads=5).collect()
        self.assertEqual(snapshot, {"running": 4, "max_threads": 5, "pool_capacity": 1})

    @patch("pumastats.StatCollector.psutil.Process")
    def test_pool_capacity_never_negative(self, process_cls):
        process_cls.return_value = fake_process(1, num_threads=9)
        snapshot = StatCollector(1, max_threads=5).collect()
        self.assertEqual(snapshot["pool_capacity"], 0)

    @patch("pumastats.StatCollector.psutil.Process")
    def test_missing_process_raises(self, process_cls):
        process_cls.side_effect = psutil.NoSuchProcess(1)
        with self.assertRaises(psutil.NoSuchProcess):
            StatCollector(1).collect()


class TestCollectClustered(unittest.TestCase):

    @patch("pumastats.StatCollector.psutil.Process")
    def test_workers(self, process_cls):
        children = [fake_process(2, num_threads=3), fake_process(3, num_threads=5)]
        process_cls.return_value = fake_process(1, num_threads=2, children=children)
        snapshot = StatCollector(1, max_threads=5).collect()

        self.assertEqual(snapshot["workers"], 2)
        self.assertEqual(snapshot["booted_workers"], 2)
        self.assertEqual(snapshot["old_workers"], 0)
        self.assertEqual([w["pid"] for w in snapshot["worker_status"]], [2, 3])
        self.assertEqual(
            snapshot["worker_status"][0]["last_status"], {"running": 3, "max_threads": 5, "pool_capacity": 2}
        )

        view = StatsView(snapshot)
        self.assertTrue(view.is_clustered)
        self.assertEqual(view.running_threads, 8)
        self.assertEqual(view.max_threads, 10)
        self.assertEqual(view.busy_workers, 2)

    @patch("pumastats.StatCollector.psutil.Process")
    def test_skips_zombies_and_vanished_workers(self, process_cls):
        vanished = fake_process(4, num_threads=0)
        vanished.status.side_effect = psutil.NoSuchProcess(4)
        children = [
            fake_process(2, num_threads=3),
            fake_process(3, num_threads=0, status=psutil.STATUS_ZOMBIE),
            vanished,
        ]
        process_cls.return_value = fake_process(1, num_threads=2, children=children)
        snapshot = StatCollector(1).collect()

        self.assertEqual(snapshot["workers"], 3)
        self.assertEqual(snapshot["booted_workers"], 1)
        self.assertEqual(len(snapshot["worker_status"]), 1)
        self.assertEqual(snapshot["worker_status"][0]["last_status"], {"running": 3})


class TestCollectCurrentProcess(unittest.TestCase):

    def test_current_process(self):
        snapshot = StatCollector(os.getpid()).collect()
        view = StatsView(snapshot)
        self.assertGreaterEqual(view.running_threads, 1)


if __name__ == "__main__":
    unittest.main()
