"""Classic machine-learning algorithms written from scratch with NumPy: hidden Markov models, k-NN, k-means, regression, Gini splits, embeddings and recurrent networks."""

__version__ = "0.1.0"

__all__ = [
    "activations",
    "csvdata",
    "embedding",
    "estimator",
    "gini",
    "hmm_algorithms",
    "hmm_model",
    "kmeans",
    "knn",
    "lstm",
    "optimizers",
    "regression",
    "rnn",
    "sequences",
    "textutils",
]