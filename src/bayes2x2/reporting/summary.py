"""
Tidy Summaries and Tables
=========================

Turns a fitted ``BetaBinomialFit`` into a tidy DataFrame (one row per term)
and renders it as plain text or HTML.

Example Usage:
--------------
>>> from bayes2x2.core import beta_binomial
>>> from bayes2x2.reporting import summary
>>>
>>> fit = beta_binomial.fit([[5, 94], [18, 188]], group_labels=['Aspirin', 'Placebo'])
>>> df = summary.tidy(fit, interval_type='hpd', level=0.95, random_state=42)
>>> print(summary.present(fit, interval_type='quantile', random_state=42))
"""

from typing import Optional

import pandas as pd

from bayes2x2.config import AnalysisConfig, DEFAULT_CONFIG, INTERVAL_TYPES
from bayes2x2.exceptions import InvalidInput
from bayes2x2.core.beta_binomial import BetaBinomialFit, DERIVED_TERMS

TIDY_COLUMNS = ['term', 'estimate', 'conf_low', 'conf_high', 'n_excluded', 'method', 'level']

FORMATS = ('text', 'html')


def _resolve(config, interval_type, level, n_samples, random_state):
    config = config or DEFAULT_CONFIG
    return AnalysisConfig(
        n_samples=n_samples if n_samples is not None else config.n_samples,
        level=level if level is not None else config.level,
        interval_type=interval_type if interval_type is not None else config.interval_type,
        random_state=random_state if random_state is not None else config.random_state,
        prior_mass=config.prior_mass,
    )


def tidy(
    fit: BetaBinomialFit,
    interval_type: Optional[str] = None,
    level: Optional[float] = None,
    n_samples: Optional[int] = None,
    random_state: Optional[int] = None,
    config: Optional[AnalysisConfig] = None,
) -> pd.DataFrame:
    """
    One row per term with its estimate and credible interval.

    Parameters
    ----------
    fit : BetaBinomialFit
        Fitted two-group model
    interval_type : str, optional
        'hpd' or 'quantile' (default from config)
    level : float, optional
        Credible level (default from config)
    n_samples : int, optional
        Draws for the derived terms (default from config)
    random_state : int, optional
        Seed for the derived-term draws
    config : AnalysisConfig, optional
        Defaults for any argument left as None

    Returns
    -------
    pd.DataFrame
        Columns: term, estimate, conf_low, conf_high, n_excluded, method,
        level. ``n_excluded`` counts the non-finite draws dropped from a
        derived term (always 0 for the group proportions)
    """
    if not isinstance(fit, BetaBinomialFit):
        raise InvalidInput("tidy expects a BetaBinomialFit")
    cfg = _resolve(config, interval_type, level, n_samples, random_state)
    result = fit.summary(
        level=cfg.level,
        method=cfg.interval_type,
        n_samples=cfg.n_samples,
        random_state=cfg.random_state,
    )
    records = [
        (term, r.estimate, r.lower, r.upper, result['n_excluded'].get(DERIVED_TERMS.get(term), 0))
        for term, r in result['intervals'].items()
    ]
    df = pd.DataFrame(records, columns=TIDY_COLUMNS[:5])
    df['method'] = cfg.interval_type
    df['level'] = cfg.level
    return df


def present(
    fit: BetaBinomialFit,
    interval_type: Optional[str] = None,
    level: Optional[float] = None,
    fmt: str = 'text',
    digits: int = 4,
    n_samples: Optional[int] = None,
    random_state: Optional[int] = None,
    config: Optional[AnalysisConfig] = None,
) -> str:
    """
    Render a fit summary as a table.

    Parameters
    ----------
    fit : BetaBinomialFit
        Fitted two-group model
    interval_type, level, n_samples, random_state, config
        As in ``tidy``
    fmt : str, default='text'
        'text' (fixed-width) or 'html'
    digits : int, default=4
        Decimal places of the numeric columns

    Returns
    -------
    str
        Header naming groups, counts and priors, followed by the table and,
        when draws were dropped, a line with the excluded counts
    """
    if fmt not in FORMATS:
        raise InvalidInput(f"fmt must be one of {list(FORMATS)}, got '{fmt}'")
    if interval_type is not None and interval_type not in INTERVAL_TYPES:
        raise InvalidInput(
            f"interval_type must be one of {list(INTERVAL_TYPES)}, got '{interval_type}'"
        )

    df = tidy(
        fit,
        interval_type=interval_type,
        level=level,
        n_samples=n_samples,
        random_state=random_state,
        config=config,
    )
    numeric = ['estimate', 'conf_low', 'conf_high']
    df[numeric] = df[numeric].round(digits)

    method = df['method'].iloc[0]
    pct = f"{df['level'].iloc[0]:.0%}"
    label = 'HPD' if method == 'hpd' else 'quantile'
    excluded = df.loc[df['n_excluded'] > 0, ['term', 'n_excluded']]
    table = df.drop(columns=['n_excluded', 'method', 'level']).rename(columns={
        'conf_low': f'{pct} {label} low',
        'conf_high': f'{pct} {label} high',
    })

    header = []
    for i, name in enumerate(fit.group_labels):
        a, b = fit.prior.group(i)
        header.append(
            f"{name}: {fit.successes[i]}/{fit.trials[i]} events, prior Beta({a:g}, {b:g})"
        )

    footer = ''
    if len(excluded):
        counts = ', '.join(f"{term}={n}" for term, n in excluded.itertuples(index=False))
        footer = f"Excluded non-finite draws: {counts}"

    if fmt == 'html':
        lines = ''.join(f'<p>{line}</p>\n' for line in header)
        html = lines + table.to_html(index=False)
        return html + (f'\n<p>{footer}</p>' if footer else '')
    text = '\n'.join(header) + '\n\n' + table.to_string(index=False)
    return text + ('\n\n' + footer if footer else '')
