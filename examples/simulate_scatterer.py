# Import required libraries and modules
import time

import jax.numpy as jnp
import pytreeclass as tc
from loguru import logger

import fdtd2d


def main():
    # Initialize experiment logger for saving outputs and tracking progress
    exp_logger = fdtd2d.Logger(
        experiment_name="simulate_scatterer",
    )

    # Plane wave from a Ricker wavelet scattering off a void cylinder
    config = fdtd2d.SimulationConfig(
        grid_size=300,
        time_steps_total=3000,
        scatterer_center=(150, 100),
        scatterer_radius=40.0,
        tfsf_first=(10, 10),
        tfsf_last=(290, 290),
        source_kind="ricker",
        material_model="void",
        dtype=jnp.float32,
    )
    logger.info(f"{config.time_steps_total=}")
    logger.info(f"{config.max_travel_distance=}")

    # Create TFSF injector, absorbing boundaries, fields and coefficients
    objects, arrays, coefficients = fdtd2d.place_objects(config)
    logger.info(tc.tree_summary(arrays, depth=1))

    # Save the material layout for experiment documentation
    exp_logger.savefig(
        exp_logger.cwd,
        "setup.png",
        fdtd2d.plot_field(
            Ez=coefficients.grid.EzE,
            Hx=coefficients.grid.HxE,
            Hy=coefficients.grid.HyE,
            config=config,
        ),
    )

    # Samples go to the blocked text file and to the metrics of the logger
    text_sink = fdtd2d.TextBlockSink(exp_logger.cwd / "FDTD.dat", stride=config.sample_stride)
    metrics_sink = fdtd2d.LoggerSink(exp_logger, config, figure_stride=100)

    run_start_time = time.time()
    with fdtd2d.MultiSink(text_sink, metrics_sink) as sink:
        time_step, arrays = fdtd2d.run_fdtd(
            arrays=arrays,
            objects=objects,
            coefficients=coefficients,
            config=config,
            sink=sink,
            progress=exp_logger.progress,
        )
    runtime_delta = time.time() - run_start_time
    logger.info(f"{runtime_delta=}")

    # Final field snapshot
    exp_logger.log_fields(
        time_step=int(time_step),
        arrays=arrays,
        config=config,
        do_print=True,
    )


# Entry point: run main function
if __name__ == "__main__":
    main()
