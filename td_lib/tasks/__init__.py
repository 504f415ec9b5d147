"""
Tasks module for the TD library.

This module provides the playing and training loops, the channel that
connects them and a pipeline that runs them on threads.
"""

from td_lib.tasks.channel import Channel, ChannelClosed
from td_lib.tasks.play import play
from td_lib.tasks.train import train, update
from td_lib.tasks.pipeline import Pipeline

__all__ = [
    'Channel',
    'ChannelClosed',
    'play',
    'train',
    'update',
    'Pipeline'
]
