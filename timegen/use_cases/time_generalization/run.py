from __future__ import annotations

import logging
import warnings
from typing import Any, Mapping, Optional, Tuple, Union

import numpy as np
from joblib import Parallel, delayed
from pydantic import ValidationError

from timegen.components.balancing.resampling import balanced_class_counts, check_balance_target
from timegen.components.evaluation.aggregate import check_metric_output
from timegen.components.splitters.folds import check_fold_feasibility, effective_num_sets
from timegen.contracts.choices import OutputType
from timegen.contracts.run_config import TimeGenConfig
from timegen.core.errors import ConfigurationError, DataShapeError
from timegen.core.logging_utils import feedback_level
from timegen.core.progress import CancellationToken, ProgressCallback
from timegen.core.shapes import check_clabel, class_counts, coerce_3d, resolve_time_indices
from timegen.factories.balance_factory import make_resampler
from timegen.factories.eval_factory import make_aggregator
from timegen.factories.fold_factory import make_folds
from timegen.factories.normalise_factory import make_normaliser
from timegen.registries.classifiers import make_classifier_adapter
from timegen.runtime.random.rng import RngManager, resolve_seed

from .assemble import TimeGenOutcome, assemble_outcome, build_result
from .folds import ProgressTicker, generalise_over_time, run_fold_task
from .modes import CrossValidated, NoCrossValidation, TrainTestSplit, select_mode
from .shapes import OutputTensorShape, output_trailing_shape
from .types import FoldTask

logger = logging.getLogger(__name__)

PROGRESS_LABEL = "Time generalisation"


def coerce_config(cfg: Union[TimeGenConfig, Mapping[str, Any], None]) -> TimeGenConfig:
    """Accept a config model, a plain dict (short form allowed) or None for defaults."""

    if isinstance(cfg, TimeGenConfig):
        return cfg
    try:
        return TimeGenConfig.model_validate(dict(cfg or {}))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid time generalisation settings:\n{exc}") from exc


def _repeat_level_policy(balance) -> bool:
    """Undersampling and explicit targets resample the whole dataset once per repeat."""
    return balance == "undersample" or isinstance(balance, int)


def _run_cross_validated(
    mode: CrossValidated,
    cfg: TimeGenConfig,
    Xn: np.ndarray,
    y: np.ndarray,
    *,
    adapter,
    output_type: OutputType,
    shape: OutputTensorShape,
    time1: np.ndarray,
    time2: np.ndarray,
    rngm: RngManager,
    log_level: int,
    progress: Optional[ProgressCallback],
    cancel: Optional[CancellationToken],
) -> Tuple[np.ndarray, np.ndarray]:
    resampler = make_resampler(cfg)
    repeat_resampler = resampler if _repeat_level_policy(cfg.balance) else None
    oversampler = resampler if cfg.balance == "oversample" else None

    tasks = []
    for rr in range(mode.repeat):
        if cancel is not None:
            cancel.raise_if_cancelled()

        Xr, yr = Xn, y
        if repeat_resampler is not None:
            Xr, yr = repeat_resampler.balance(Xn, y, rngm.child_generator(f"repeat{rr}/balance"))

        partition = make_folds(
            mode.cv,
            yr,
            k=mode.k,
            stratify=mode.stratify,
            p=mode.p,
            seed=rngm.child_seed(f"repeat{rr}/folds"),
        )
        if partition.num_sets != shape.n_folds:
            raise RuntimeError(
                f"Fold generator returned {partition.num_sets} sets; expected {shape.n_folds}."
            )
        logger.log(log_level, "Repetition #%d: %d train/test sets", rr + 1, partition.num_sets)

        X_train_r = Xr[:, :, time1]
        X_test_r = Xr[:, :, time2]
        for kk in range(partition.num_sets):
            tasks.append(
                FoldTask(
                    repeat=rr,
                    fold=kk,
                    X_train=X_train_r,
                    X_test=X_test_r,
                    y=yr,
                    train_idx=partition.train_indices(kk),
                    test_idx=partition.test_indices(kk),
                    oversample_stream=f"repeat{rr}/fold{kk}/oversample" if oversampler is not None else None,
                )
            )

    ticker = ProgressTicker(progress, total=shape.n_units, label=PROGRESS_LABEL)
    run_kwargs = dict(
        adapter=adapter,
        output_type=output_type,
        time1=time1,
        rngm=rngm,
        oversampler=oversampler,
        cancel=cancel,
        ticker=ticker,
    )

    if cfg.n_jobs == 1:
        fold_outputs = [run_fold_task(task, **run_kwargs) for task in tasks]
    else:
        # threads share the repeat tensors and the cancellation token
        fold_outputs = Parallel(n_jobs=cfg.n_jobs, backend="threading")(
            delayed(run_fold_task)(task, **run_kwargs) for task in tasks
        )
    ticker.finalize()

    raw = shape.allocate()
    testlabel = shape.allocate_testlabels()
    for out in fold_outputs:
        for t1, cell in enumerate(out.cells):
            raw[out.repeat, out.fold, t1] = cell
        testlabel[out.repeat, out.fold] = out.testlabel
    return raw, testlabel


def _run_single_split(
    X_train: np.ndarray,
    y_train: np.ndarray,
    X_test: np.ndarray,
    *,
    adapter,
    output_type: OutputType,
    shape: OutputTensorShape,
    time1: np.ndarray,
    progress: Optional[ProgressCallback],
    cancel: Optional[CancellationToken],
) -> np.ndarray:
    """Train on X_train (time1 slice) and test on X_test (time2 slice) at every pair."""

    ticker = ProgressTicker(progress, total=shape.n_units, label=PROGRESS_LABEL)
    cells = generalise_over_time(
        adapter,
        X_train,
        y_train,
        X_test,
        output_type,
        time1=time1,
        cancel=cancel,
        on_time_point=ticker.tick,
    )
    ticker.finalize()

    raw = shape.allocate()
    for t1, cell in enumerate(cells):
        raw[:, t1] = cell
    return raw


def classify_timextime(
    cfg: Union[TimeGenConfig, Mapping[str, Any], None],
    X,
    clabel,
    X2=None,
    clabel2=None,
    *,
    progress: Optional[ProgressCallback] = None,
    cancel: Optional[CancellationToken] = None,
) -> TimeGenOutcome:
    """Time x time generalisation.

    A classifier is trained at each training time point in ``time1`` and
    tested at every test time point in ``time2``.

    Parameters
    ----------
    cfg:
        :class:`TimeGenConfig`, a dict in the same (short) form, or None.
    X, clabel:
        (n_samples, n_features, n_times) data and labels 1..C.
    X2, clabel2:
        Optional independent test dataset. When given, the classifier is
        trained on X and tested on X2 without cross-validation.
    progress, cancel:
        Optional progress callback and cancellation token, both consulted
        between training time points.

    Returns
    -------
    TimeGenOutcome
        ``perf`` is (n_time1, n_time2) unless the metric is None, in which
        case the raw classifier outputs are returned instead.
    """

    cfg = coerce_config(cfg)
    log_level = feedback_level(cfg.feedback)

    X = coerce_3d(X)
    y, n_classes = check_clabel(clabel, X.shape[0])

    has_second = X2 is not None
    if has_second:
        if clabel2 is None:
            raise DataShapeError("clabel2 is required when a test dataset X2 is given.")
        X2 = coerce_3d(X2)
        y2, n_classes2 = check_clabel(clabel2, X2.shape[0])
        if X2.shape[1] != X.shape[1]:
            raise DataShapeError(
                f"X and X2 must have the same number of features; got {X.shape[1]} and {X2.shape[1]}."
            )
        if n_classes2 > n_classes:
            raise DataShapeError(
                f"clabel2 contains class {n_classes2} which does not occur in the training labels."
            )
    elif clabel2 is not None:
        raise DataShapeError("clabel2 was given without a test dataset X2.")

    mode = select_mode(cfg, has_second_dataset=has_second)

    time1 = resolve_time_indices(cfg.time1, X.shape[2], name="time1")
    time2 = resolve_time_indices(cfg.time2, (X2 if has_second else X).shape[2], name="time2")

    output_type = cfg.resolved_output_type()
    check_metric_output(cfg.metric, output_type, n_classes)

    rngm = RngManager(resolve_seed(cfg.seed))
    adapter = make_classifier_adapter(cfg.classifier, seed=rngm.child_seed("classifier"), n_classes=n_classes)
    if not adapter.supports(output_type):
        raise ConfigurationError(
            f"Classifier {cfg.classifier.algo!r} cannot produce output_type={output_type!r}."
        )

    counts = class_counts(y, n_classes)
    target = cfg.balance_target
    if target is not None and not isinstance(mode, NoCrossValidation):
        check_balance_target(counts, target)

    normaliser = make_normaliser(cfg.normalise)
    trailing = output_trailing_shape(output_type, n_classes)

    if isinstance(mode, CrossValidated):
        if target is not None and target > counts.max():
            # repeat-level copies would end up in both training and test folds
            raise ConfigurationError(
                f"balance target [{target}] exceeds every class size {counts.tolist()}; "
                "use balance='oversample' to oversample the training folds only."
            )
        eval_counts = balanced_class_counts(counts, cfg.balance) if _repeat_level_policy(cfg.balance) else counts
        check_fold_feasibility(mode.cv, eval_counts, k=mode.k, stratify=mode.stratify, p=mode.p)
        if target is not None and mode.cv == "kfold" and mode.stratify and target % mode.k != 0:
            warnings.warn(
                f"balance target {target} is not a multiple of k={mode.k}; "
                "stratified folds will not contain equal class counts.",
                UserWarning,
                stacklevel=2,
            )

        n_eval = int(eval_counts.sum())
        shape = OutputTensorShape(
            cross_validated=True,
            n_time1=len(time1),
            n_time2=len(time2),
            n_repeats=mode.repeat,
            n_folds=effective_num_sets(mode.cv, n_eval, mode.k),
            trailing=trailing,
            output_type=output_type,
        )
        logger.log(
            log_level,
            "Using %s classifier with %d repetitions of %s cross-validation (%d sets), %d x %d time points",
            cfg.classifier.algo,
            mode.repeat,
            mode.cv,
            shape.n_folds,
            shape.n_time1,
            shape.n_time2,
        )

        raw, testlabel = _run_cross_validated(
            mode,
            cfg,
            normaliser.normalise(X),
            y,
            adapter=adapter,
            output_type=output_type,
            shape=shape,
            time1=time1,
            time2=time2,
            rngm=rngm,
            log_level=log_level,
            progress=progress,
            cancel=cancel,
        )

    elif isinstance(mode, TrainTestSplit):
        X_train = normaliser.normalise(X[:, :, time1])
        X_test = normaliser.normalise(X2[:, :, time2])
        y_train = y
        resampler = make_resampler(cfg)
        if resampler is not None:
            X_train, y_train = resampler.balance(X_train, y_train, rngm.child_generator("train/balance"))

        n_eval = int(X2.shape[0])
        shape = OutputTensorShape(
            cross_validated=False,
            n_time1=len(time1),
            n_time2=len(time2),
            n_test=n_eval,
            trailing=trailing,
            output_type=output_type,
        )
        logger.log(
            log_level,
            "Using %s classifier, training on %d samples and testing on %d independent samples",
            cfg.classifier.algo,
            y_train.shape[0],
            n_eval,
        )
        raw = _run_single_split(
            X_train,
            y_train,
            X_test,
            adapter=adapter,
            output_type=output_type,
            shape=shape,
            time1=time1,
            progress=progress,
            cancel=cancel,
        )
        testlabel = y2

    else:
        if cfg.balance != "none":
            warnings.warn(
                f"balance={cfg.balance!r} is ignored without cross-validation.",
                UserWarning,
                stacklevel=2,
            )
        Xn = normaliser.normalise(X)
        n_eval = int(X.shape[0])
        shape = OutputTensorShape(
            cross_validated=False,
            n_time1=len(time1),
            n_time2=len(time2),
            n_test=n_eval,
            trailing=trailing,
            output_type=output_type,
        )
        logger.log(
            log_level,
            "Using %s classifier without cross-validation; training and test data are identical "
            "and performance estimates will be inflated by overfitting",
            cfg.classifier.algo,
        )
        raw = _run_single_split(
            Xn[:, :, time1],
            y,
            Xn[:, :, time2],
            adapter=adapter,
            output_type=output_type,
            shape=shape,
            time1=time1,
            progress=progress,
            cancel=cancel,
        )
        testlabel = y

    aggregator = make_aggregator(cfg.metric, output_type=output_type, n_classes=n_classes)
    if aggregator is None:
        perf, perf_std = raw, None
    else:
        perf, perf_std = aggregator.aggregate(raw, testlabel, cross_validated=shape.cross_validated)
        logger.log(log_level, "Finished: %s", cfg.metric)

    result = build_result(
        cfg=cfg,
        mode=mode,
        output_type=output_type,
        n=n_eval,
        n_classes=n_classes,
        n_folds=shape.n_folds,
        time1=time1,
        time2=time2,
    )
    return assemble_outcome(perf=perf, perf_std=perf_std, testlabel=testlabel, result=result)
