class PriorityQueue:
    """
    Binary min-heap of [priority, value] pairs.

    There is no decrease-key: callers re-enqueue a value with its improved
    priority and skip stale entries when they come out.
    """

    def __init__(self):
        self.values = []

    def enqueue(self, value, priority):
        self.values.append([priority, value])
        self._bubble_up()

    def _bubble_up(self):
        idx = len(self.values) - 1
        element = self.values[idx]
        while idx > 0:
            parent_idx = (idx - 1) // 2
            parent = self.values[parent_idx]
            if element[0] >= parent[0]:
                break
            self.values[parent_idx] = element
            self.values[idx] = parent
            idx = parent_idx

    def dequeue(self):
        """Remove and return the value with the lowest priority."""
        if not self.values:
            raise IndexError("dequeue from an empty priority queue")
        smallest = self.values[0]
        end = self.values.pop()
        if self.values:
            self.values[0] = end
            self._sink_down()
        return smallest[1]

    def _sink_down(self):
        idx = 0
        length = len(self.values)
        element = self.values[0]
        while True:
            left_idx = 2 * idx + 1
            right_idx = 2 * idx + 2
            swap = None

            if left_idx < length and self.values[left_idx][0] < element[0]:
                swap = left_idx
            if right_idx < length:
                right = self.values[right_idx]
                # ties between the children go to the left one
                if (swap is None and right[0] < element[0]) or \
                        (swap is not None and right[0] < self.values[left_idx][0]):
                    swap = right_idx

            if swap is None:
                break
            self.values[idx] = self.values[swap]
            self.values[swap] = element
            idx = swap

    def is_empty(self) -> bool:
        return not self.values

    def __len__(self):
        return len(self.values)
