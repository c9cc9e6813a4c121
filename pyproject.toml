[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "scratchml"
version = "0.1.0"
description = "Small machine-learning algorithms written from scratch: hidden Markov models, k-NN, k-means, regression, Gini splits, embeddings, RNN and LSTM."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "machine-learning",
    "hidden-markov-model",
    "viterbi",
    "forward-backward",
    "knn",
    "k-means",
    "logistic-regression",
    "linear-regression",
    "gini",
    "embedding",
    "lstm",
    "rnn",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["scratchml"]

[tool.pytest.ini_options]
addopts = "-ra"
