"""
RadarDetect API Examples

Usage examples demonstrating the detection statistics API.
"""

import os
import sys

import numpy as np

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def example_threshold():
    """
    Example 1: Detection Threshold

    Threshold for a given false alarm probability, and back again.
    """
    from radardetect import Probability, calculate_pfa, calculate_threshold

    print("=== Threshold vs Pfa ===")
    pfa = Probability(1e-6)

    for n in (1, 3, 10, 30, 100):
        thr = calculate_threshold(n, pfa)
        print(f"  n={n:3d}: Thr={thr:10.4f}  Pfa check={calculate_pfa(n, thr)}")


def example_marcum():
    """
    Example 2: Non-fluctuating Target

    Pd of a Marcum target, then the SNR needed for Pd = 0.9.
    """
    from radardetect import Marcum, Probability

    print("\n=== Marcum Target ===")
    pfa = Probability(1e-6)

    model = Marcum.from_snr_and_pfa(10.0, pfa, 3)
    print(f"SNR = 10 dB per pulse, 3 pulses: Pd = {model.pd.value:.6f}")

    required = Marcum.from_pd_and_pfa(Probability(0.9), pfa, 3)
    print(f"Pd = 0.9 needs {required.snr_db:.2f} dB per pulse")
    print()
    print(required)


def example_swerling_cases():
    """
    Example 3: Swerling Fluctuation Cases

    Required SNR per pulse for each case at Pd = 0.9, Pfa = 1e-6.
    """
    from radardetect import Probability, SwerlingModel, create_target_model

    print("\n=== Swerling Cases (Pd=0.9, Pfa=1e-6, n=10) ===")

    for case in SwerlingModel:
        model = create_target_model(Probability(0.9), Probability(1e-6), 10, case)
        print(f"  {case.name}: K={model.dof}, SNR={model.snr_db:.2f} dB")


def example_pd_curve():
    """
    Example 4: Pd vs SNR

    Detection curves for a slow and a fast fluctuating target.
    """
    from radardetect.physics.metrics import calculate_pd_curve

    print("\n=== Pd vs SNR (n=4, Pfa=1e-6) ===")

    snr_db = np.arange(0.0, 25.0, 5.0)
    sw1 = calculate_pd_curve(snr_db, 1e-6, 1, 4)
    sw2 = calculate_pd_curve(snr_db, 1e-6, 2, 4)

    print("SNR [dB]   SW1       SW2")
    for snr, pd1, pd2 in zip(snr_db, sw1, sw2):
        print(f"  {snr:5.1f}   {pd1:.5f}   {pd2:.5f}")


def example_albersheim():
    """
    Example 5: Albersheim Approximation

    Compare the closed-form estimate with the exact result.
    """
    from radardetect.physics.metrics import albersheim_snr, required_snr_db

    print("\n=== Albersheim vs Exact (Pfa=1e-6) ===")

    for pd in (0.5, 0.9, 0.99):
        approx = albersheim_snr(pd, 1e-6)
        exact = required_snr_db(pd, 1e-6)
        print(f"  Pd={pd}: Albersheim={approx:.2f} dB, exact={exact:.2f} dB")


def example_fluctuation_loss():
    """
    Example 6: Fluctuation Loss

    Extra SNR a fluctuating target costs over a steady one.
    """
    from radardetect import SwerlingModel
    from radardetect.physics.metrics import fluctuation_loss_db

    print("\n=== Fluctuation Loss (Pd=0.9, Pfa=1e-6) ===")

    for n in (1, 10):
        losses = ", ".join(
            f"{case.name}={fluctuation_loss_db(case, n_pulses=n):.2f}" for case in SwerlingModel
        )
        print(f"  n={n}: {losses}")


if __name__ == "__main__":
    print("RadarDetect API Examples")
    print("=" * 60)

    example_threshold()
    example_marcum()
    example_swerling_cases()
    example_pd_curve()
    example_albersheim()
    example_fluctuation_loss()

    print("\n" + "=" * 60)
    print("All examples completed successfully!")
