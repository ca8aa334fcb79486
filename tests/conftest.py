import matplotlib

# Headless rendering for overlay plots
matplotlib.use("Agg")
