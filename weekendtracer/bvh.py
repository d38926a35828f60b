"""A bounding volume hierarchy over a scene's spheres, built with the surface area heuristic."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import accumulate

from weekendtracer.geometry import AABB, Ray
from weekendtracer.scene import HitRecord, Scene
from weekendtracer.vec import FLT_MAX, Vec3, _div

_TRAVERSAL_COST = 0.3
_INTERSECTION_COST = 1.0
_DEBUG_MAX_DEPTH = 10


@dataclass(frozen=True, slots=True)
class BVHNode:
    """A tree node.

    For an internal node ``left`` and ``right`` index child nodes. For a leaf
    ``right`` is None and ``left`` is the index of the sphere it holds.
    """

    left: int
    right: int | None = None

    @property
    def is_leaf(self) -> bool:
        return self.right is None


class BVH:
    """Nodes and their bounds stored side by side, with the root's index."""

    def __init__(
        self,
        scene: Scene,
        nodes: list[BVHNode] | None = None,
        bounds: list[AABB] | None = None,
        root: int = 0,
    ) -> None:
        self.scene = scene
        self.nodes: list[BVHNode] = nodes if nodes is not None else []
        self.bounds: list[AABB] = bounds if bounds is not None else []
        self.root = root

    def __len__(self) -> int:
        return len(self.nodes)

    def _add_node(self, left: int, right: int | None, box: AABB) -> int:
        self.nodes.append(BVHNode(left, right))
        self.bounds.append(box)
        return len(self.nodes) - 1

    @classmethod
    def build(cls, scene: Scene) -> BVH:
        """Build a hierarchy over every sphere in ``scene``.

        Children are stored before their parent, so the root comes last.
        """
        if len(scene) == 0:
            raise ValueError("cannot build a BVH over an empty scene")
        bvh = cls(scene)
        indices = list(range(len(scene)))
        bvh.root = bvh._build(indices, 0, len(indices))
        return bvh

    def _sort_span(self, indices: list[int], start: int, end: int, axis: int) -> None:
        aabbs = self.scene.aabbs
        indices[start:end] = sorted(indices[start:end], key=lambda i: aabbs[i].center()[axis])

    def _build(self, indices: list[int], start: int, end: int) -> int:
        aabbs = self.scene.aabbs
        span = end - start

        if span == 1:
            return self._add_node(indices[start], None, aabbs[indices[start]])

        if span == 2:
            idx_a, idx_b = indices[start], indices[start + 1]
            box_a, box_b = aabbs[idx_a], aabbs[idx_b]
            left_leaf = self._add_node(idx_a, None, box_a)
            right_leaf = self._add_node(idx_b, None, box_b)
            return self._add_node(left_leaf, right_leaf, box_a.union(box_b))

        span_boxes = [aabbs[i] for i in indices[start:end]]
        parent_sa = span_boxes[0]
        for box in span_boxes[1:]:
            parent_sa = parent_sa.union(box)
        parent_area = parent_sa.surface_area()

        best_cost = FLT_MAX
        best_axis = 0
        best_split = start + span // 2

        for axis in range(3):
            self._sort_span(indices, start, end, axis)
            ordered = [aabbs[i] for i in indices[start:end]]
            left_boxes = list(accumulate(ordered, AABB.union))
            right_boxes = list(accumulate(reversed(ordered), AABB.union))[::-1]

            if parent_area == 0.0:
                continue
            for i in range(1, span):
                left_sa = left_boxes[i - 1].surface_area()
                right_sa = right_boxes[i].surface_area()
                cost = _TRAVERSAL_COST + (
                    (i * left_sa + (span - i) * right_sa) / parent_area * _INTERSECTION_COST
                )
                if cost < best_cost:
                    best_cost = cost
                    best_axis = axis
                    best_split = start + i

        if best_axis != 2:
            self._sort_span(indices, start, end, best_axis)

        left_idx = self._build(indices, start, best_split)
        right_idx = self._build(indices, best_split, end)
        combined = self.bounds[left_idx].union(self.bounds[right_idx])
        return self._add_node(left_idx, right_idx, combined)

    @staticmethod
    def _slab(
        box: AABB,
        inv_dir: Vec3,
        neg_origin_inv: Vec3,
        t_min: float,
        t_max: float,
    ) -> float | None:
        """Entry distance of the ray into ``box`` within [t_min, t_max], or None on a miss."""
        t_enter, t_exit = t_min, t_max
        for axis in range(3):
            inv = inv_dir[axis]
            bias = neg_origin_inv[axis]
            t0 = inv * box.minimum[axis] + bias
            t1 = inv * box.maximum[axis] + bias
            t_enter = max(min(t0, t1), t_enter)
            t_exit = min(max(t0, t1), t_exit)
            if t_exit < t_enter:
                return None
        return t_enter

    def traverse(
        self, ray: Ray, t_min: float = 0.001, t_max: float = FLT_MAX
    ) -> HitRecord | None:
        """The closest sphere hit strictly inside (t_min, t_max), if any.

        Children are visited nearer first so that later boxes are culled by
        the shrinking far limit.
        """
        if not self.nodes:
            return None
        inv_dir = 1.0 / ray.direction
        neg_origin_inv = Vec3(
            -ray.origin.x * inv_dir.x,
            -ray.origin.y * inv_dir.y,
            -ray.origin.z * inv_dir.z,
        )

        best: HitRecord | None = None
        stack = [self.root]
        while stack:
            node = self.nodes[stack.pop()]
            if node.is_leaf:
                hit = self.scene.intersect_primitive(ray, t_min, t_max, node.left)
                if hit is not None:
                    best = hit
                    t_max = hit.t
                continue

            enter_left = self._slab(self.bounds[node.left], inv_dir, neg_origin_inv, t_min, t_max)
            enter_right = self._slab(self.bounds[node.right], inv_dir, neg_origin_inv, t_min, t_max)

            if enter_left is not None and enter_right is not None:
                if enter_left > enter_right:
                    stack.extend((node.left, node.right))
                else:
                    stack.extend((node.right, node.left))
            elif enter_left is not None:
                stack.append(node.left)
            elif enter_right is not None:
                stack.append(node.right)
        return best

    def reorder_veb(self) -> int:
        """Lay the nodes out top-down, each parent before its left then right subtree.

        Child indices are remapped and the new root index (0) is stored and returned.
        """
        order: list[int] = []
        stack = [self.root]
        while stack:
            index = stack.pop()
            order.append(index)
            node = self.nodes[index]
            if not node.is_leaf:
                stack.extend((node.right, node.left))

        node_map = {old: new for new, old in enumerate(order)}
        new_nodes: list[BVHNode] = []
        for old in order:
            node = self.nodes[old]
            if node.is_leaf:
                new_nodes.append(node)
            else:
                new_nodes.append(BVHNode(node_map[node.left], node_map[node.right]))
        self.bounds = [self.bounds[old] for old in order]
        self.nodes = new_nodes
        self.root = node_map[self.root]
        return self.root

    def debug_lines(self, node_index: int | None = None, depth: int = 0) -> list[str]:
        """A readable, indented description of the subtree at ``node_index`` (the root by default)."""
        lines: list[str] = []
        self._describe(self.root if node_index is None else node_index, depth, lines)
        return lines

    def _describe(self, index: int, depth: int, lines: list[str]) -> None:
        if not 0 <= index < len(self.nodes):
            lines.append(f"Invalid node index: {index}")
            return

        node = self.nodes[index]
        box = self.bounds[index]
        lo, hi = box.minimum, box.maximum
        bounds_text = (
            f"Bounds: ({lo.x:.2f},{lo.y:.2f},{lo.z:.2f}) to ({hi.x:.2f},{hi.y:.2f},{hi.z:.2f})"
        )
        indent = "  " * depth
        if node.is_leaf:
            lines.append(f"{indent}Leaf Node {index}: Sphere {node.left}, {bounds_text}")
            return

        lines.append(
            f"{indent}Internal Node {index}: Left {node.left}, Right {node.right}, {bounds_text}"
        )
        if depth < _DEBUG_MAX_DEPTH:
            self._describe(node.left, depth + 1, lines)
            self._describe(node.right, depth + 1, lines)


__all__ = ["BVH", "BVHNode", "_div"]