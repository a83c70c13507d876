from primatte import Primatte, COLOR_SPACES, ALPHA_LOCATORS
from primatte import load_image, save_image, blend, to_float
import os

# Input paths
image_path = "bluescreen_image.png"
new_background_path = "background.png"
# Output paths
alpha_path = "out/bluescreen_alpha_%s_%s.png"
blended_path = "out/bluescreen_new_background_%s_%s.png"
os.makedirs("out", exist_ok=True)

# Limit image size to make demo run faster
height = 256

# shape (height, width, 3) of data type numpy.uint8
image = load_image(image_path, "RGB", "BILINEAR", height=height)

new_background = load_image(
    path=new_background_path,
    mode="RGB",
    interpolation="BILINEAR",
    width=image.shape[1],
    height=image.shape[0])

background = (78/255, 94/255, 239/255)

def timer(name, seconds):
    print("%-16s %f seconds"%(name, seconds))

# Calculate alpha in every color space with every alpha locator
for color_space in COLOR_SPACES:
    for alpha_locator in ALPHA_LOCATORS:
        algorithm = Primatte(
            color_space=color_space,
            grid_size=2,
            random_simplify=True,
            random_simplify_percentage=25.0,
            seed=0,
            alpha_locator=alpha_locator,
            timer=timer)

        algorithm.set_input(image, background)
        algorithm.analyse()
        alpha = algorithm.compute_alphas()

        print("%s, %s: %d iterations, converged: %s"%(
            color_space,
            alpha_locator,
            algorithm.report.iterations,
            algorithm.report.converged))

        save_image(alpha_path % (color_space, alpha_locator), alpha)

        image_on_new_background = blend(to_float(image), to_float(new_background), alpha)

        save_image(blended_path % (color_space, alpha_locator), image_on_new_background)
