from dataclasses import dataclass, field
from typing import Literal

from ampsparam.physics import shue_parameters, vs_intensity_a

DEFAULT_ENERGY_BINS_MEV: tuple[float, ...] = (1.0, 5.0, 10.0, 30.0, 100.0, 300.0, 1000.0)


@dataclass
class RunConfiguration:
    """
    Complete, mutable set of AMPS run parameters.

    One instance is created per session with the September 2017 SEP storm case
    (Van Allen Probe A trajectory run) as defaults and is then updated in place
    by `ampsparam.hydrate.hydrate` whenever a parameter file is loaded. Every field
    has a value at all times; optional model drivers use None for "not given".

    Discriminator fields select which group of fields is in use:
        calc_target: CUTOFF_RIGIDITY | FLUX | BOTH | DENSITY_3D
        field_eval_method: GRIDLESS | GRID_3D
        boundary_type: BOX | SHUE
        temporal_mode: STEADY_STATE | TIME_SERIES | MHD_COUPLED
        spectrum_type: POWER_LAW | POWER_LAW_CUTOFF | LIS_FORCE_FIELD | BAND | TABLE
        output_mode: POINTS | TRAJECTORY | SHELLS
    """

    # --- Run info --- #
    run_name: str = "SEP_Sep2017_VanAllenProbeA"
    pi_name: str = ""
    pi_email: str = ""
    science_goal: str = ""

    # --- Calculation mode --- #
    calc_target: str = "CUTOFF_RIGIDITY"
    field_eval_method: str = "GRIDLESS"
    grid_nx: int = 64
    grid_ny: int = 64
    grid_nz: int = 64
    grid_xmin: float = -60.0  # RE GSM
    grid_xmax: float = 15.0
    grid_ymin: float = -25.0
    grid_ymax: float = 25.0
    grid_zmin: float = -20.0
    grid_zmax: float = 20.0
    cutoff_emin: float = 1.0  # MeV/n
    cutoff_emax: float = 10000.0
    cutoff_max_particles: int = 500
    cutoff_nenergy: int = 40
    dens_emin: float = 1.0  # MeV/n
    dens_emax: float = 1000.0
    dens_nenergy: int = 20
    dens_energy_spacing: str = "LOG"

    # --- Particle species --- #
    species: str = "proton"
    charge: int = 1  # elementary charges
    mass_amu: float = 1.0073

    # --- Background magnetic field: shared drivers --- #
    field_model: str = "TS05"
    dst: float = -142.0  # nT
    pdyn: float = 3.5  # nPa
    imf_bz: float = -18.5  # nT GSM
    sw_vx: float = -650.0  # km/s
    sw_n: float = 12.0  # cm^-3
    imf_by: float = 3.2  # nT
    imf_bx: float = 0.0  # nT
    epoch: str = "2017-09-10T16:00"

    # --- TS05 advanced drivers --- #
    ts05_tilt_rad: float | None = None
    ts05_imf_flag: int | None = None
    ts05_sw_flag: int | None = None
    ts05_w1: float | None = None
    ts05_w2: float | None = None
    ts05_w3: float | None = None
    ts05_w4: float | None = None
    ts05_w5: float | None = None
    ts05_w6: float | None = None

    # --- T96 drivers --- #
    t96_dst: float = -20.0
    t96_pdyn: float = 2.0
    t96_imf_by: float = 0.0
    t96_imf_bz: float = 2.0
    t96_tilt_deg: float = 0.0

    # --- T01 drivers --- #
    t01_dst: float = -20.0
    t01_pdyn: float = 2.0
    t01_imf_by: float = 0.0
    t01_imf_bz: float = 2.0
    t01_tilt_deg: float = 0.0
    t01_g1: float | None = None
    t01_g2: float | None = None
    t01_epoch: str | None = None

    # --- TA15 drivers --- #
    ta15_bx_gsw: float | None = None
    ta15_by_gsw: float | None = None
    ta15_bz_gsw: float | None = None
    ta15_vx_gse: float | None = None
    ta15_vy_gse: float | None = None
    ta15_vz_gse: float | None = None
    ta15_np: float | None = None
    ta15_t_k: float | None = None
    ta15_symh: float | None = None
    ta15_imf_flag: int | None = None
    ta15_sw_flag: int | None = None
    ta15_tilt_rad: float | None = None
    ta15_pdyn: float | None = None
    ta15_n_index: float | None = None
    ta15_b_index: float | None = None
    ta15_epoch: str | None = None

    # --- TA16 RBF drivers --- #
    ta16_bx_gsw: float | None = None
    ta16_by_gsw: float | None = None
    ta16_bz_gsw: float | None = None
    ta16_vx_gse: float | None = None
    ta16_vy_gse: float | None = None
    ta16_vz_gse: float | None = None
    ta16_np: float | None = None
    ta16_t_k: float | None = None
    ta16_symh: float | None = None
    ta16_symhc: float | None = None
    ta16_imf_flag: int | None = None
    ta16_sw_flag: int | None = None
    ta16_tilt_rad: float | None = None
    ta16_pdyn: float | None = None
    ta16_n_index: float | None = None
    ta16_b_index: float | None = None
    ta16_epoch: str | None = None

    # --- Domain boundary --- #
    boundary_type: str = "SHUE"
    box_x_max: float = 15.0  # RE GSM
    box_x_min: float = -60.0
    box_y_max: float = 25.0
    box_y_min: float = -25.0
    box_z_max: float = 20.0
    box_z_min: float = -20.0
    box_r_inner: float = 2.0
    shue_mode: Literal["auto", "manual"] = "auto"
    shue_r0: float | None = None  # RE, manual override
    shue_alpha: float | None = None  # manual override
    x_tail: float = -60.0  # RE nightside cap
    shue_r_inner: float = 2.0

    # --- Electric field --- #
    corotation_e: bool = True
    conv_e_model: str = "VOLLAND_STERN"
    vs_kp_mode: Literal["auto", "manual"] = "auto"
    vs_kp: float = 5.9  # consistent with the default Dst
    vs_gamma: float = 2.0
    weimer_mode: str = "auto"

    # --- Temporal --- #
    temporal_mode: str = "TIME_SERIES"
    event_start: str = "2017-09-07T00:00"
    event_end: str = "2017-09-10T20:00"
    field_update_dt: float = 5.0  # min
    inject_dt: float = 30.0  # min
    ts_source: Literal["omni", "file", "scalar"] = "omni"

    # --- Source spectrum --- #
    spectrum_type: str = "POWER_LAW"
    spec_j0: float = 10000.0  # p/cm2/s/sr/(MeV/n)
    spec_gamma: float = 3.5
    spec_e0: float = 10.0  # MeV/n
    spec_emin: float = 1.0
    spec_emax: float = 1000.0
    spec_ec: float = 500.0
    spec_phi: float = 550.0  # MV
    spec_lis_j0: float = 10000.0
    spec_lis_gamma: float = 2.7
    spec_gamma1: float = 3.5
    spec_gamma2: float = 1.5
    spec_table_file: str = "sep_spectrum_H+.txt"

    # --- Output domain --- #
    output_mode: str = "TRAJECTORY"
    flux_dt: float = 1.0  # min
    points_text: str = ""
    shell_count: int = 1
    shell_res_deg: int = 2
    shell_alts_km: list[float] = field(default_factory=lambda: [500.0])

    # --- Output options --- #
    flux_type: str = "DIFFERENTIAL"
    output_cutoff: bool = True
    output_pitch: bool = False
    output_format: str = "NETCDF4"
    output_coords: str = "GEO"
    energy_bins: list[float] = field(default_factory=lambda: list(DEFAULT_ENERGY_BINS_MEV))

    # --- Numerical --- #
    n_particles: int = 10000
    max_bounce: int = 500
    dt_trace: float = 1.0  # s
    pitch_isotropic: bool = True

    @property
    def vs_a(self) -> float:
        """Volland–Stern intensity coefficient for the current Kp."""
        return vs_intensity_a(self.vs_kp)

    def effective_shue(self) -> tuple[float, float]:
        """Shue (r0, alpha) in use: the manual pair when fully given, else derived from IMF Bz and Pdyn."""
        if self.shue_mode == "manual" and self.shue_r0 is not None and self.shue_alpha is not None:
            return self.shue_r0, self.shue_alpha
        return shue_parameters(self.imf_bz, self.pdyn)

    def point_lines(self) -> list[str]:
        """Non-empty point entries from points_text, skipping '#' comment lines."""
        lines = (line.strip() for line in self.points_text.splitlines())
        return [line for line in lines if line and not line.startswith("#")]
