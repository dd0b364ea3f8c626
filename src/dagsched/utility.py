from sortedcontainers import SortedDict


class EventLoop:
    """Discrete event loop

    Callbacks are invoked as ``callback(time, *args)`` in increasing time order,
    and in insertion order for equal times. Callbacks may add further events,
    including at the current time.
    """

    def __init__(self):
        self.timesteps = SortedDict()

    def __len__(self) -> int:
        return sum(len(callbacks) for callbacks in self.timesteps.values())

    def add_event(self, time, callback, *args):
        if time in self.timesteps:
            self.timesteps[time].append((callback, *args))
        else:
            self.timesteps[time] = [(callback, *args)]

    def run(self):
        while len(self.timesteps) > 0:
            time, callbacks = self.timesteps.popitem(0)
            while len(callbacks) > 0:
                callback = callbacks.pop(0)
                callback[0](time, *callback[1:])
