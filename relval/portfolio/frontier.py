"""
Monte Carlo exploration of a risk/return portfolio frontier.

**Conceptual**: Instead of solving a mean-variance optimization, the frontier
is approximated by drawing many random portfolios over the candidate assets
and scoring each one. The scatter of (volatility, expected return) samples
traces the attainable region; its upper-left edge approximates the efficient
frontier. Two portfolios are singled out:
  - min-volatility: the least risky sample.
  - max-Sharpe: the sample with the best return per unit of risk.

**Sampling model** (per sample):
  1. Draw one Uniform[0, 1) weight per asset and divide by the sum. This is
     NOT a uniform draw over the simplex (a Dirichlet(1, ..., 1) would be);
     normalized uniforms concentrate toward equal weights. The biased sampler
     is kept deliberately so results stay comparable with earlier runs.
     A draw summing to exactly 0 is redrawn.
  2. Draw a fresh expected return ~ Uniform[-0.02, 0.08) and a fresh risk
     ~ Uniform[0.05, 0.25) for every asset. Asset characteristics are noise
     re-drawn per sample, not fixed per asset.
  3. Aggregate with zero correlation:
        E[R_p] = Σ w_i * r_i
        σ_p   = sqrt( Σ (w_i * σ_i)^2 )
        Sharpe = E[R_p] / σ_p   (0 if σ_p == 0)

**Parallelism**: Samples are independent, so the draw count can be split into
contiguous chunks run on a thread pool. Each chunk gets its own child
generator spawned from the caller's generator, and chunks are concatenated in
draw order before selection. The result is deterministic for a given seed and
worker count.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Hashable, Sequence

import numpy as np
import pandas as pd
from loguru import logger

from relval.utils.errors import InvalidArgumentError
from relval.utils.math import make_rng

RETURN_LOW = -0.02
RETURN_HIGH = 0.08
RISK_LOW = 0.05
RISK_HIGH = 0.25


@dataclass(frozen=True)
class FrontierSample:
    """
    One sampled portfolio.

    Attributes:
        volatility: Portfolio volatility in percent.
        expected_return: Portfolio expected return in percent.
        sharpe: expected_return / volatility (raw ratio), 0 when volatility is 0.
        weights: Weight per asset, aligned with Frontier.asset_ids, summing to 1.
        draw: Position of the sample in draw order.
    """
    volatility: float
    expected_return: float
    sharpe: float
    weights: tuple[float, ...]
    draw: int


@dataclass
class Frontier:
    """
    Sampled frontier plus the two distinguished portfolios.

    Attributes:
        asset_ids: Candidate assets, in the order weights refer to.
        points: Samples in draw order.
        min_vol_portfolio: Lowest-volatility sample (None if no samples).
        max_sharpe_portfolio: Highest-Sharpe sample (None if no samples).
    """
    asset_ids: tuple[Hashable, ...] = ()
    points: list[FrontierSample] = field(default_factory=list)
    min_vol_portfolio: FrontierSample | None = None
    max_sharpe_portfolio: FrontierSample | None = None

    def to_frame(self) -> pd.DataFrame:
        """Samples as a DataFrame with columns volatility, expected_return, sharpe."""
        return pd.DataFrame(
            {
                'volatility': [p.volatility for p in self.points],
                'expected_return': [p.expected_return for p in self.points],
                'sharpe': [p.sharpe for p in self.points],
            }
        )

    def weights_for(self, sample: FrontierSample) -> dict[Hashable, float]:
        """Map asset ids to a sample's weights (later duplicates overwrite earlier)."""
        return dict(zip(self.asset_ids, sample.weights))


def draw_normalized_weights(
    rng: np.random.Generator,
    n_samples: int,
    n_assets: int,
) -> np.ndarray:
    """
    Draw n_samples weight vectors by normalizing independent uniforms.

    Rows whose uniforms sum to 0 are redrawn until they don't, so the division
    never sees a zero denominator.

    Returns:
        Array of shape (n_samples, n_assets) with rows summing to 1.
    """
    raw = rng.random((n_samples, n_assets))
    totals = raw.sum(axis=1)
    degenerate = totals == 0
    while degenerate.any():
        raw[degenerate] = rng.random((int(degenerate.sum()), n_assets))
        totals = raw.sum(axis=1)
        degenerate = totals == 0
    return raw / totals[:, None]


def _sample_chunk(
    rng: np.random.Generator,
    n_samples: int,
    n_assets: int,
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Draw and score one contiguous chunk of portfolios."""
    weights = draw_normalized_weights(rng, n_samples, n_assets)
    asset_returns = rng.uniform(RETURN_LOW, RETURN_HIGH, size=(n_samples, n_assets))
    asset_risks = rng.uniform(RISK_LOW, RISK_HIGH, size=(n_samples, n_assets))

    expected_return = (weights * asset_returns).sum(axis=1)
    volatility = np.sqrt(((weights * asset_risks) ** 2).sum(axis=1))

    # Sharpe falls back to 0 where volatility is 0
    sharpe = np.divide(
        expected_return,
        volatility,
        out=np.zeros_like(expected_return),
        where=volatility > 0,
    )
    return weights, expected_return, volatility, sharpe


def _chunk_sizes(total: int, chunks: int) -> list[int]:
    base, extra = divmod(total, chunks)
    return [base + (1 if i < extra else 0) for i in range(chunks)]


def explore_frontier(
    asset_ids: Sequence[Hashable],
    samples: int = 1000,
    rng: np.random.Generator | None = None,
    max_workers: int = 1,
) -> Frontier:
    """
    Sample random portfolios over the candidate assets.

    **Functionally**:
    - Input: ordered asset identifiers (opaque; duplicates allowed, each
      position is its own asset), a sample count, an optional generator, and
      a worker count.
    - Output: Frontier with ``samples`` points in draw order plus the
      min-volatility and max-Sharpe samples. Ties go to the earliest draw.
    - Volatility and expected return are reported in percent.

    **Edge cases**:
    - No assets or zero samples → empty frontier, both selections None.
    - Negative samples → InvalidArgumentError.

    Args:
        asset_ids: Candidate assets.
        samples: Number of portfolios to draw (>= 0).
        rng: Random source. Defaults to make_rng().
        max_workers: Threads to spread the draws over (1 = sequential).

    Returns:
        Frontier for the caller to own.
    """
    if samples < 0:
        raise InvalidArgumentError(f"samples must be non-negative, got {samples}.")

    assets = tuple(asset_ids)
    n_assets = len(assets)

    if n_assets == 0 or samples == 0:
        logger.debug("Frontier skipped: assets={} samples={}", n_assets, samples)
        return Frontier(asset_ids=assets)

    rng = make_rng(rng)
    workers = max(1, min(max_workers, samples))

    if workers == 1:
        chunks = [_sample_chunk(rng, samples, n_assets)]
    else:
        sizes = _chunk_sizes(samples, workers)
        children = rng.spawn(workers)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(_sample_chunk, child, size, n_assets)
                for child, size in zip(children, sizes)
            ]
            # Collected in submission order so draw indices stay contiguous
            chunks = [future.result() for future in futures]

    weights = np.concatenate([c[0] for c in chunks])
    expected_return = np.concatenate([c[1] for c in chunks])
    volatility = np.concatenate([c[2] for c in chunks])
    sharpe = np.concatenate([c[3] for c in chunks])

    points = [
        FrontierSample(
            volatility=float(volatility[i] * 100.0),
            expected_return=float(expected_return[i] * 100.0),
            sharpe=float(sharpe[i]),
            weights=tuple(float(w) for w in weights[i]),
            draw=i,
        )
        for i in range(samples)
    ]

    # argmin/argmax return the first occurrence on ties
    min_vol = points[int(np.argmin(volatility))]
    max_sharpe = points[int(np.argmax(sharpe))]

    logger.debug(
        "Frontier sampled: assets={} samples={} workers={} min_vol={:.2f}% max_sharpe={:.3f}",
        n_assets, samples, workers, min_vol.volatility, max_sharpe.sharpe,
    )
    return Frontier(
        asset_ids=assets,
        points=points,
        min_vol_portfolio=min_vol,
        max_sharpe_portfolio=max_sharpe,
    )
