import matplotlib.pyplot as plt
import numpy as np



def plot_extrema(data, x=None, y=None, plot_path=None):
    """Plots the function, first and second derivative bands with candidate regions shaded.
    """

    grid = data["grid"]
    bands = [ data["f_band"], data["d1_band"], data["d2_band"] ]
    titles = [ "$f$", "$f'$", "$f''$" ]

    fig, axs = plt.subplots(3, 1, figsize=(8,10), sharex=True)
    for j, (band, title) in enumerate(zip(bands, titles)):
        mid = band.shape[1] // 2
        axs[j].fill_between(grid, band[:,0], band[:,-1], color="blue", alpha=0.25, label="band")
        axs[j].plot(grid, band[:,mid], color="blue", label="median")
        if j > 0:
            axs[j].axhline(0.0, color="k", linestyle="dashed", linewidth=1.0)
        for region in data["regions"]:
            color = "red" if region["kind"] == "max" else "green" if region["kind"] == "min" else "gray"
            axs[j].axvspan(region["start"], region["stop"], color=color, alpha=0.2)
        axs[j].set_title(title)

    if (x is not None) and (y is not None):
        axs[0].scatter(np.asarray(x), np.asarray(y), color="k", s=5.0, alpha=0.5, label="data")

    axs[0].legend()
    axs[2].set_xlabel("$x$")
    fig.suptitle(f"Candidate extrema ({data['test']} test)")

    if plot_path is not None:
        fig.savefig(plot_path, dpi=250)
        plt.close()
        return None
    else:
        plt.show()
        return None
