import os
import sys
import logging
import numpy as np
import matplotlib.pyplot as plt

sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
from clear_neurons.initializers import uniform_generator, xavier_generator
from clear_neurons.layer import LayerConfiguration
from clear_neurons.network import Network


# --- Sum Example ---

def sum_example():
    """Fits a single linear neuron to y = x0 + x1."""
    logger = logging.getLogger("SumExample")
    logger.setLevel(logging.INFO)

    rng = np.random.default_rng(0)
    X = rng.uniform(-1.0, 1.0, size=(50, 2))
    y = X.sum(axis=1, keepdims=True)

    network = Network(
        input_count=2,
        layer_configurations=[
            LayerConfiguration(neuron_count=1, neuron_type='linear',
                               coefficient_generator=uniform_generator(seed=0)),
        ],
    )
    print(network.summary())

    history = []
    for epoch in range(200):
        for inputs, targets in zip(X, y):
            network.train_with(inputs, targets, step_size=-0.01)
        loss = np.mean([network.compute_loss(network.run_with(inputs), targets)
                        for inputs, targets in zip(X, y)])
        history.append(loss)
        if epoch % 50 == 0:
            print(f"Epoch {epoch+1}/200 - loss: {loss:.6f}")

    logger.info(f"Learned weights (w0, w1, bias): {network.get_weights()[0][0]}")
    return history


# --- XOR Example ---

def xor_example():
    """Example of training a ReLU hidden layer on the XOR problem."""
    logger = logging.getLogger("XORExample")
    logger.setLevel(logging.INFO)

    logger.info("--- Running XOR Example ---")
    X = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
    y = [[0.0], [1.0], [1.0], [0.0]]

    network = Network(
        input_count=2,
        layer_configurations=[
            LayerConfiguration(8, 'relu', xavier_generator(2, 8, seed=1)),
            LayerConfiguration(1, 'linear', xavier_generator(8, 1, seed=2)),
        ],
        output_count=1,
    )
    logger.info(f"XOR Network Summary:\n{network.summary()}")

    history = []
    for epoch in range(2000):
        for inputs, targets in zip(X, y):
            network.train_with(inputs, targets, step_size=-0.05)
        loss = np.mean([network.compute_loss(network.run_with(inputs), targets)
                        for inputs, targets in zip(X, y)])
        history.append(loss)
        if epoch % 500 == 0:
            print(f"Epoch {epoch+1}/2000 - loss: {loss:.5f}")

    correct = 0
    for inputs, target in zip(X, y):
        prediction = network.run_with(inputs)[0]
        pred_class = prediction >= 0.5
        is_correct = pred_class == bool(target[0])
        if is_correct: correct += 1
        logger.info(f"Input: {inputs}, Target: {target[0]}, Prediction: {prediction:.4f} -> "
                    f"Class: {int(pred_class)} {'(Correct)' if is_correct else '(Incorrect)'}")
    logger.info(f"XOR Accuracy: {correct / len(X):.2%}")
    return history


# --- Script Execution ---

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    print("\n" + "="*40)
    print("--- Running Sum Regression Example ---")
    print("="*40)
    sum_history = sum_example()

    print("\n" + "="*40)
    print("--- Running XOR Classification Example ---")
    print("="*40)
    xor_history = xor_example()

    plt.figure("Training History", figsize=(12, 5))
    plt.subplot(1, 2, 1)
    plt.plot(sum_history, label='Sum (MSE)')
    plt.xlabel('Epoch')
    plt.ylabel('Loss')
    plt.yscale('log')
    plt.title('Sum Regression')
    plt.legend()
    plt.grid(True, alpha=0.3)

    plt.subplot(1, 2, 2)
    plt.plot(xor_history, label='XOR (MSE)')
    plt.xlabel('Epoch')
    plt.ylabel('Loss')
    plt.title('XOR')
    plt.legend()
    plt.grid(True, alpha=0.3)
    plt.tight_layout()

    print("\nDisplaying plots. Close plot windows to exit.")
    plt.show()
