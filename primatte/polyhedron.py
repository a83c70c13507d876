from .colorspace import color_offsets
import numpy as np
import scipy.ndimage

# 4-neighbourhood on the (theta, phi) grid
NEIGHBOUR_KERNEL = np.array([
    [0.00, 0.25, 0.00],
    [0.25, 0.00, 0.25],
    [0.00, 0.25, 0.00],
])

def unit_vectors(theta, phi):
    # axis 0 of the color space is the polar axis
    theta = np.asarray(theta, dtype=np.float64)
    phi = np.asarray(phi, dtype=np.float64)
    sin_theta = np.sin(theta)
    return np.stack([
        np.cos(theta),
        sin_theta*np.cos(phi),
        sin_theta*np.sin(phi),
    ], axis=-1)

class BoundingPolyhedron:
    """
    Closed star-shaped surface around a center point in color space.

    The surface is parametrized by a grid of theta_faces latitudes times
    phi_faces longitudes. Direction (j, i) points at

        theta_j = (j + 0.5) * pi / theta_faces
        phi_i   = i * 2 pi / phi_faces

    and stores the distance of the surface from the center in that
    direction in radii[j, i]. Since every direction has exactly one radius,
    the surface can not intersect itself.
    """

    def __init__(
        self,
        center,
        phi_faces=16,
        theta_faces=8,
        radius=0.1,
        color_space="rgb",
    ):
        if phi_faces < 3 or theta_faces < 3:
            raise ValueError("phi_faces and theta_faces must be at least 3, but are %s and %s"%(
                phi_faces, theta_faces))

        if radius < 0:
            raise ValueError("radius must not be negative, but is %s"%radius)

        self.center = np.array(center, dtype=np.float64)
        self.phi_faces = int(phi_faces)
        self.theta_faces = int(theta_faces)
        self.color_space = color_space

        self.phi_step = 2*np.pi/self.phi_faces
        self.theta_step = np.pi/self.theta_faces

        self.radii = np.full((self.theta_faces, self.phi_faces), float(radius))

        assert(self.center.shape == (3,))

    def copy(self):
        other = BoundingPolyhedron(
            self.center,
            self.phi_faces,
            self.theta_faces,
            color_space=self.color_space)
        other.radii = self.radii.copy()
        return other

    def freeze(self):
        self.radii.flags.writeable = False

    @property
    def frozen(self):
        return not self.radii.flags.writeable

    def grid_angles(self):
        theta = (np.arange(self.theta_faces) + 0.5)*self.theta_step
        phi = np.arange(self.phi_faces)*self.phi_step
        return np.meshgrid(theta, phi, indexing="ij")

    def locate(self, points):
        """
        Spherical coordinates of points relative to the center.

        Returns
        -------
        distance, theta, phi: ndarrays of shape points.shape[:-1]
            theta in [0, pi], phi in [0, 2 pi).
            Points at the center get theta = phi = 0.
        """
        offsets = color_offsets(points, self.center, self.color_space)

        distance = np.linalg.norm(offsets, axis=-1)

        safe_distance = np.where(distance > 0, distance, 1.0)
        cos_theta = np.where(distance > 0, offsets[..., 0]/safe_distance, 1.0)

        theta = np.arccos(np.clip(cos_theta, -1, 1))
        phi = np.arctan2(offsets[..., 2], offsets[..., 1]) % (2*np.pi)

        return distance, theta, phi

    def _row_stencil(self, rows, phi):
        # Rows beyond a pole continue on the same latitude on the other side.
        crossed = (rows < 0) | (rows >= self.theta_faces)
        rows = np.clip(rows, 0, self.theta_faces - 1)
        phi = np.where(crossed, phi + np.pi, phi)

        v = phi/self.phi_step
        i0 = np.floor(v)
        fv = v - i0
        i0 = i0.astype(np.intp) % self.phi_faces
        i1 = (i0 + 1) % self.phi_faces

        offset = rows*self.phi_faces
        return offset + i0, offset + i1, fv

    def stencil(self, theta, phi):
        """
        Grid directions and weights of the bilinear interpolation in
        direction (theta, phi).

        Returns
        -------
        indices: ndarray of int, shape theta.shape + (4,)
            Flat indices j*phi_faces + i into radii.
        weights: ndarray of float64, shape theta.shape + (4,)
            Non-negative, summing to 1.
        """
        theta = np.asarray(theta, dtype=np.float64)
        phi = np.asarray(phi, dtype=np.float64)

        u = theta/self.theta_step - 0.5
        j0 = np.floor(u)
        fu = u - j0
        j0 = j0.astype(np.intp)

        a0, a1, fa = self._row_stencil(j0, phi)
        b0, b1, fb = self._row_stencil(j0 + 1, phi)

        indices = np.stack([a0, a1, b0, b1], axis=-1)
        weights = np.stack([
            (1 - fu)*(1 - fa),
            (1 - fu)*fa,
            fu*(1 - fb),
            fu*fb,
        ], axis=-1)

        return indices, weights

    def radius(self, theta, phi):
        """
        Radius of the surface in direction (theta, phi), bilinearly
        interpolated between the surrounding grid directions.
        """
        indices, weights = self.stencil(theta, phi)
        return (weights*self.radii.ravel()[indices]).sum(axis=-1)

    def smooth(self, radii, strength):
        """
        Blend every radius with the mean of its four grid neighbours.
        The first and last latitude rows are neighbours of themselves
        on the opposite longitude across the pole.
        """
        assert(radii.shape == self.radii.shape)

        shift = self.phi_faces//2
        padded = np.concatenate([
            np.roll(radii[:1], shift, axis=1),
            radii,
            np.roll(radii[-1:], shift, axis=1),
        ], axis=0)

        neighbours = scipy.ndimage.convolve(padded, NEIGHBOUR_KERNEL, mode="wrap")[1:-1]

        return (1 - strength)*radii + strength*neighbours

    def vertices(self):
        """
        Vertices of the triangulated surface in color space.
        One vertex per grid direction, followed by the north and south pole.
        """
        theta, phi = self.grid_angles()

        grid = self.center + self.radii[..., np.newaxis]*unit_vectors(theta, phi)

        axis = np.array([1.0, 0.0, 0.0])
        north = self.center + self.radii[0].mean()*axis
        south = self.center - self.radii[-1].mean()*axis

        return np.concatenate([grid.reshape(-1, 3), [north, south]], axis=0)

    def faces(self):
        """Vertex indices of the triangles of the closed surface."""
        n_phi = self.phi_faces
        n_theta = self.theta_faces
        north = n_theta*n_phi
        south = north + 1

        i = np.arange(n_phi)
        i_next = (i + 1) % n_phi

        faces = [
            np.stack([np.full(n_phi, north), i, i_next], axis=1),
        ]

        for j in range(n_theta - 1):
            a = j*n_phi + i
            b = j*n_phi + i_next
            c = (j + 1)*n_phi + i
            d = (j + 1)*n_phi + i_next
            faces.append(np.stack([a, c, b], axis=1))
            faces.append(np.stack([b, c, d], axis=1))

        last = (n_theta - 1)*n_phi
        faces.append(np.stack([np.full(n_phi, south), last + i_next, last + i], axis=1))

        return np.concatenate(faces, axis=0)

def estimate_cluster_radius(
    samples,
    center,
    color_space="rgb",
    percentile=10.0,
    min_radius=1e-3,
):
    """
    Characteristic extent of the background color cluster, estimated as
    a percentile of the distances of all samples to the background color.
    """
    offsets = color_offsets(samples, center, color_space)
    distances = np.linalg.norm(offsets, axis=-1)
    return max(float(np.percentile(distances, percentile)), min_radius)
