from ampsparam.visualize.spectrum import plot_source_spectrum

__all__ = ["plot_source_spectrum"]
