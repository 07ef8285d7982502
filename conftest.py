import matplotlib

# headless: no GUI windows while collecting/running tests
matplotlib.use("Agg")
