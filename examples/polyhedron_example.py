from primatte import Primatte, Classification, load_image
import os

image_path = "bluescreen_image.png"
obj_path = "out/bluescreen_polyhedron.obj"
samples_path = "out/bluescreen_samples.obj"
os.makedirs("out", exist_ok=True)

image = load_image(image_path, "RGB", height=128)

algorithm = Primatte(color_space="lab", grid_size=4, print_info=True)
algorithm.set_input(image, (78/255, 94/255, 239/255))
algorithm.analyse()

polyhedron = algorithm.polyhedron

# Wavefront OBJ, readable by most 3D viewers
with open(obj_path, "w") as f:
    for x, y, z in polyhedron.vertices():
        f.write("v %f %f %f\n"%(x, y, z))

    for a, b, c in polyhedron.faces() + 1:
        f.write("f %d %d %d\n"%(a, b, c))

# Samples as colored point cloud, red channel marks foreground samples
classes = algorithm.classifications()

with open(samples_path, "w") as f:
    for (x, y, z), (r, g, b), c in zip(algorithm.samples, algorithm.sample_colors(), classes):
        if c == Classification.FOREGROUND:
            r, g, b = 1.0, 0.0, 0.0
        f.write("v %f %f %f %f %f %f\n"%(x, y, z, r, g, b))

print("%d vertices, %d faces, %d foreground samples"%(
    len(polyhedron.vertices()),
    len(polyhedron.faces()),
    (classes == Classification.FOREGROUND).sum()))
