import argparse
import sys

from config.annotator_config import AnnotatorConfig, SuperpixelOptions
from config.logging_config import LOG_LEVELS, configure_logging
from controllers.annotator_controller import AnnotatorController
from services.image_loader import load_image


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Annotation d'image par superpixels.")
    parser.add_argument("image", help="Image source à annoter")
    parser.add_argument("--import", dest="annotation", help="Annotation PNG à importer")
    parser.add_argument("--grayscale", action="store_true", help="Annotation importée en niveaux de gris")
    parser.add_argument("--segments", type=int, default=SuperpixelOptions().n_segments)
    parser.add_argument("--label", type=int, default=None, help="Label courant")
    parser.add_argument("--fill", type=int, default=None, help="Remplace ce label par le label courant")
    parser.add_argument("--denoise", action="store_true", help="Applique le filtre majoritaire")
    parser.add_argument("--export", dest="output", help="Chemin PNG de sortie")
    parser.add_argument("--log-level", default="INFO", type=str.upper, choices=LOG_LEVELS)
    parser.add_argument("--log-file", default=None)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logger = configure_logging(args.log_level, args.log_file)

    config = AnnotatorConfig(superpixel=SuperpixelOptions(n_segments=args.segments))
    annotator = AnnotatorController(load_image(args.image), config=config, logger=logger)

    if args.annotation:
        annotator.import_annotation(args.annotation, grayscale=args.grayscale)
    if args.label is not None:
        annotator.current_label = args.label
    if args.fill is not None:
        annotator.fill(args.fill)
    if args.denoise:
        annotator.denoise()
    if args.output:
        annotator.export_annotation(args.output)

    print(" ".join(str(label) for label in annotator.get_unique_labels()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
