"""FBAFileUtil service: converts between flat files and KBase FBA objects.

Conversions are done by external transform scripts found under the
configured ``transform-plugin-path``. Each call gets its own scratch
directory under ``scratch``.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from .conversion_runner import ConversionRunner
from .errors import ArgumentShapeError, NotImplementedConversionError
from .kb_ws_utils import KBWSUtils

SERVICE_NAME = "FBAFileUtil"
REQUIRED_SETTINGS = ["workspace-url", "transform-plugin-path", "scratch"]
SETTING_LABELS = {"scratch": "scratch space"}

SBML_UPLOAD_SCRIPT = "scripts/upload/trns_transform_SBML_FBAModel_to_KBaseFBA_FBAModel.pl"
SBML_VALIDATE_SCRIPT = "scripts/validate/trns_validate_SBML_FBAModel.py"
SBML_DOWNLOAD_SCRIPT = "scripts/download/trns_transform_KBaseFBA_FBAModel_to_SBML_FBAModel.pl"


class FBAFileUtil(KBWSUtils):
    """Format conversion between SBML/TSV/Excel files and Workspace objects.

    Upload methods return ``{"ref": "wsid/objid/version"}``; download methods
    return ``{"path": <file in a scratch directory>}``. Methods without a
    converter raise NotImplementedConversionError after checking their
    arguments.
    """

    VERSION = "0.0.1"
    GIT_URL = ""
    GIT_COMMIT_HASH = ""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        config_file: Optional[str] = None,
        log_level: str = "INFO",
        **kwargs: Any,
    ) -> None:
        """Read deployment settings and set up the converter runner.

        Raises:
            ConfigurationError: if workspace-url, transform-plugin-path or
                scratch is not configured
        """
        super().__init__(
            config=config,
            config_file=config_file,
            section=SERVICE_NAME,
            name=SERVICE_NAME,
            log_level=log_level,
            **kwargs,
        )
        settings = self.require_config(REQUIRED_SETTINGS, SETTING_LABELS)
        self.workspace_url = settings["workspace-url"]
        self.transform_plugin_path = Path(settings["transform-plugin-path"])
        self.scratch = Path(settings["scratch"])
        self.perl = self.get_config_value("perl-interpreter", "perl")
        self.python = self.get_config_value("python-interpreter", "python")
        self.runner = ConversionRunner(self.scratch, log_level=log_level)

    def _script(self, relative_path: str) -> str:
        return str(self.transform_plugin_path / relative_path)

    def _check_file_param(self, method: str, params: Dict[str, Any], key: str) -> str:
        value = params[key]
        if not isinstance(value, dict) or "path" not in value:
            raise ArgumentShapeError(
                f'Invalid arguments passed to {method}:\n\t"{key}" must be a '
                'structure with a "path" field',
                method_name=method,
            )
        return value["path"]

    # ------------------------------------------------------------------
    # FBA model converters
    # ------------------------------------------------------------------

    def sbml_file_to_model(self, *args: Any, validate: bool = False) -> Dict[str, str]:
        """Upload an SBML file as an FBAModel object.

        Params: model_file ({path}), model_name, workspace_name.
        SBML validation is off unless ``validate`` is set, the validator
        needs libsbml.
        """
        method = "sbml_file_to_model"
        params = self.check_single_param(method, args)
        self.validate_args(params, ["model_file", "model_name", "workspace_name"], {}, method)
        input_path = self._check_file_param(method, params, "model_file")
        self.initialize_call(method, params, print_params=True)

        scratch = self.runner.prepare_scratch_space()
        if validate:
            self.runner.run_external_converter(
                [
                    self.python,
                    self._script(SBML_VALIDATE_SCRIPT),
                    "--input_file_name", input_path,
                    "--working_directory", str(scratch.path),
                ],
                cwd=scratch.path,
            )

        self.runner.run_external_converter(
            [
                self.perl,
                self._script(SBML_UPLOAD_SCRIPT),
                "--input_file_name", input_path,
                "--object_name", params["model_name"],
                "--workspace_name", params["workspace_name"],
                "--workspace_service_url", self.workspace_url,
                "--fba_service_url", "impl",
            ],
            cwd=scratch.path,
        )
        ref = self.resolve_workspace_reference(
            params["workspace_name"], params["model_name"]
        )
        self.log_info(f"Saved model {params['model_name']} as {ref}")
        return {"ref": ref}

    def model_to_sbml_file(self, *args: Any) -> Dict[str, str]:
        """Export an FBAModel object to an SBML file.

        Params: workspace_name, model_name.
        """
        method = "model_to_sbml_file"
        params = self.check_single_param(method, args)
        self.validate_args(params, ["workspace_name", "model_name"], {}, method)
        self.initialize_call(method, params, print_params=True)

        scratch = self.runner.prepare_scratch_space()
        self.runner.run_external_converter(
            [
                self.perl,
                self._script(SBML_DOWNLOAD_SCRIPT),
                "--object_name", params["model_name"],
                "--workspace_name", params["workspace_name"],
                "--workspace_service_url", self.workspace_url,
                "--fba_service_url", "impl",
            ],
            cwd=scratch.path,
        )
        output_file = self.runner.collect_single_output_file(scratch)
        return {"path": str(output_file)}

    def excel_file_to_model(self, *args: Any) -> Dict[str, str]:
        self.check_single_param("excel_file_to_model", args)
        raise NotImplementedConversionError("excel_file_to_model")

    def tsv_file_to_model(self, *args: Any) -> Dict[str, str]:
        self.check_single_param("tsv_file_to_model", args)
        raise NotImplementedConversionError("tsv_file_to_model")

    def model_to_excel_file(self, *args: Any) -> Dict[str, str]:
        self.check_single_param("model_to_excel_file", args)
        raise NotImplementedConversionError("model_to_excel_file")

    def model_to_tsv_file(self, *args: Any) -> Dict[str, str]:
        self.check_single_param("model_to_tsv_file", args)
        raise NotImplementedConversionError("model_to_tsv_file")

    # ------------------------------------------------------------------
    # FBA result converters
    # ------------------------------------------------------------------

    def fba_to_excel_file(self, *args: Any) -> Dict[str, str]:
        self.check_single_param("fba_to_excel_file", args)
        raise NotImplementedConversionError("fba_to_excel_file")

    def fba_to_tsv_file(self, *args: Any) -> Dict[str, str]:
        self.check_single_param("fba_to_tsv_file", args)
        raise NotImplementedConversionError("fba_to_tsv_file")

    # ------------------------------------------------------------------
    # Media and phenotype converters
    # ------------------------------------------------------------------

    def tsv_file_to_media(self, *args: Any) -> None:
        self.check_single_param("tsv_file_to_media", args, expected=0)
        raise NotImplementedConversionError("tsv_file_to_media")

    def media_to_tsv_file(self, *args: Any) -> Dict[str, str]:
        self.check_single_param("media_to_tsv_file", args)
        raise NotImplementedConversionError("media_to_tsv_file")

    def tsv_file_to_phenotype_set(self, *args: Any) -> None:
        self.check_single_param("tsv_file_to_phenotype_set", args, expected=0)
        raise NotImplementedConversionError("tsv_file_to_phenotype_set")

    def phenotype_set_to_tsv_file(self, *args: Any) -> Dict[str, str]:
        self.check_single_param("phenotype_set_to_tsv_file", args)
        raise NotImplementedConversionError("phenotype_set_to_tsv_file")

    def phenotype_simulation_set_to_excel_file(self, *args: Any) -> Dict[str, str]:
        self.check_single_param("phenotype_simulation_set_to_excel_file", args)
        raise NotImplementedConversionError("phenotype_simulation_set_to_excel_file")

    def phenotype_simulation_set_to_tsv_file(self, *args: Any) -> Dict[str, str]:
        self.check_single_param("phenotype_simulation_set_to_tsv_file", args)
        raise NotImplementedConversionError("phenotype_simulation_set_to_tsv_file")

    def status(self) -> Dict[str, str]:
        """Return the module status: version, state and git info."""
        return {
            "state": "OK",
            "message": "",
            "version": self.VERSION,
            "git_url": self.GIT_URL,
            "git_commit_hash": self.GIT_COMMIT_HASH,
        }

    @classmethod
    def declared_methods(cls) -> List[str]:
        """Names of all declared conversion methods."""
        return [
            "excel_file_to_model",
            "sbml_file_to_model",
            "tsv_file_to_model",
            "model_to_excel_file",
            "model_to_sbml_file",
            "model_to_tsv_file",
            "fba_to_excel_file",
            "fba_to_tsv_file",
            "tsv_file_to_media",
            "media_to_tsv_file",
            "tsv_file_to_phenotype_set",
            "phenotype_set_to_tsv_file",
            "phenotype_simulation_set_to_excel_file",
            "phenotype_simulation_set_to_tsv_file",
        ]
