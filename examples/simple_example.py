from primatte import chroma_key, load_image, save_image, stack_images, to_float

image = load_image("bluescreen_image.png", "RGB")

# color of the blue screen
background = (78/255, 94/255, 239/255)

alpha = chroma_key(image, background, color_space="lab", grid_size=4, print_info=True)

cutout = stack_images(to_float(image), alpha)

save_image("out/bluescreen_cutout.png", cutout)
