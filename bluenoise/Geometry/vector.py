import math


class Vector2:
    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = x
        self.y = y

    def set(self, x: float, y: float):
        self.x = x
        self.y = y
        return self

    def distance_squared(self, x: float, y: float) -> float:
        dx = self.x - x
        dy = self.y - y
        return dx * dx + dy * dy

    def distance(self, x: float, y: float) -> float:
        return math.sqrt(self.distance_squared(x, y))

    def __iter__(self):
        yield self.x
        yield self.y

    def __eq__(self, other):
        if not isinstance(other, Vector2):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __repr__(self):
        return f"Vector2({self.x:.6f}, {self.y:.6f})"


class Vector3:
    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self.x = x
        self.y = y
        self.z = z

    def set(self, x: float, y: float, z: float):
        self.x = x
        self.y = y
        self.z = z
        return self

    def dot(self, other) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self):
        """原地归一化为单位向量，返回自身"""
        inv = 1.0 / self.length()
        self.x *= inv
        self.y *= inv
        self.z *= inv
        return self

    def distance_squared(self, x: float, y: float, z: float) -> float:
        dx = self.x - x
        dy = self.y - y
        dz = self.z - z
        return dx * dx + dy * dy + dz * dz

    def distance(self, x: float, y: float, z: float) -> float:
        return math.sqrt(self.distance_squared(x, y, z))

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other):
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __repr__(self):
        return f"Vector3({self.x:.6f}, {self.y:.6f}, {self.z:.6f})"
